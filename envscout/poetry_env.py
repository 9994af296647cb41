"""Environment variables that affect where Poetry keeps its files."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path


def _path(value: str | None) -> Path | None:
    return None if value is None else Path(value)


@dataclass(frozen=True)
class PoetryEnvVariables:
    """Poetry settings read from the process environment."""

    home: Path | None
    root: Path | None
    app_data: Path | None
    poetry_virtualenvs_path: Path | None
    poetry_home: Path | None
    poetry_config_dir: Path | None
    poetry_cache_dir: Path | None
    poetry_virtualenvs_in_project: bool | None
    path: str | None

    @classmethod
    def from_environment(
        cls,
        environ: Mapping[str, str] | None = None,
        home: Path | None = None,
        root: Path | None = None,
    ) -> PoetryEnvVariables:
        """Read the variables from ``environ`` (the process environment by default).

        ``home`` defaults to the current user's home directory.
        """
        if environ is None:
            environ = os.environ
        if home is None:
            try:
                home = Path.home()
            except RuntimeError:
                home = None

        poetry_home = None
        home_value = environ.get("POETRY_HOME")
        if home is not None and home_value is not None:
            if home_value.startswith("~"):
                poetry_home = Path(home_value.replace("~", str(home)))
            else:
                poetry_home = Path(home_value)

        in_project = environ.get("POETRY_VIRTUALENVS_IN_PROJECT")
        return cls(
            home=home,
            root=root,
            app_data=_path(environ.get("APPDATA")),
            poetry_virtualenvs_path=_path(environ.get("POETRY_VIRTUALENVS_PATH")),
            poetry_home=poetry_home,
            poetry_config_dir=_path(environ.get("POETRY_CONFIG_DIR")),
            poetry_cache_dir=_path(environ.get("POETRY_CACHE_DIR")),
            poetry_virtualenvs_in_project=(
                None
                if in_project is None
                else in_project == "1" or in_project.lower() == "true"
            ),
            path=environ.get("PATH"),
        )