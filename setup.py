import os
from setuptools import setup, find_packages

long_description = ""
if os.path.exists("README.md"):
    with open("README.md", "r", encoding="utf-8") as readme:
        long_description = readme.read()

setup(
    name="django-repository-pipes",
    version="0.1.0",
    description="Model repositories with pipe-based save and delete pipelines for Django.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["repository_pipes", "repository_pipes.*"]),
    include_package_data=True,
    install_requires=[
        "Django>=4.2.27",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-django>=4.7",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Web Environment",
        "Framework :: Django",
        "Framework :: Django :: 4.2",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.9",
)
