from django.db import models


class Author(models.Model):
    name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    password = models.CharField(max_length=128, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "test_app"


class Tag(models.Model):
    name = models.CharField(max_length=50)

    class Meta:
        app_label = "test_app"


class Article(models.Model):
    title = models.CharField(max_length=200)
    body = models.TextField(blank=True)
    author = models.ForeignKey(
        Author, on_delete=models.CASCADE, related_name="articles"
    )
    tags = models.ManyToManyField(Tag, blank=True, related_name="articles")
    slug = models.SlugField(editable=False, blank=True)

    class Meta:
        app_label = "test_app"
