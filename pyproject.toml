[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ytrss"
version = "0.1.0"
description = "A small self-hosted web app that follows YouTube channels through their RSS feeds."
requires-python = ">=3.10"
keywords = ["youtube", "rss", "atom", "feed", "htmx", "flask"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "flask",
    "bcrypt",
    "requests",
    "defusedxml",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ytrss = "ytrss.app:main"

[tool.hatch.build.targets.wheel]
packages = ["ytrss"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
