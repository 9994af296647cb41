"""Building blocks for finding Python environments of Poetry, pyenv, Pipenv and Homebrew."""

__version__ = "0.1.0"