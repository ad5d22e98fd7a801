from repository_pipes import Repository
from repository_pipes.pipes import EncryptPasswordPipe

from .models import Article, Author, Tag
from .pipes import AppendSuffix, UppercaseTitle


class AuthorRepository(Repository):
    model = Author
    uses_transaction = True
    pipes = {"save": [EncryptPasswordPipe]}


class ArticleRepository(Repository):
    model = Article
    fillable = ("title", "body", "author", "author_id", "tags")
    pipes = {
        "create": ["test_app.pipes.AppendSuffix:*"],
        "save": [UppercaseTitle],
    }
    pipe_groups = {
        "shout": ["test_app.pipes.AppendSuffix:!"],
        "question": [AppendSuffix],
    }


class TagRepository(Repository):
    model = Tag


class KeyedTagRepository(Repository):
    model = Tag
    fillable = ("id", "name")
