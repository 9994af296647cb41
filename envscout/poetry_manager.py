"""Locating the Poetry executable."""

from __future__ import annotations

import enum
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from envscout.poetry_env import PoetryEnvVariables

logger = logging.getLogger(__name__)


class ManagerTool(enum.Enum):
    """Tools that manage Python environments."""

    CONDA = "Conda"
    POETRY = "Poetry"
    PYENV = "Pyenv"


@dataclass(frozen=True, order=True)
class EnvManager:
    """An environment manager found on this machine."""

    executable: Path
    version: str | None
    tool: ManagerTool


def _search_paths(env_vars: PoetryEnvVariables, home: Path) -> list[Path]:
    paths = [
        home / ".poetry" / "bin" / "poetry",
        # Where pipx installs it.
        home / ".local" / "pipx" / "venvs" / "poetry" / "bin" / "poetry",
    ]
    windows = sys.platform == "win32"
    if env_vars.poetry_home is not None:
        poetry_home = env_vars.poetry_home
        if windows:
            paths.append(poetry_home / "bin" / "poetry.exe")
            paths.append(poetry_home / "venv" / "bin" / "poetry.exe")
        paths.append(poetry_home / "bin" / "poetry")
        paths.append(poetry_home / "venv" / "bin" / "poetry")

    if windows:
        app_data = env_vars.app_data
        if app_data is not None:
            paths.extend(
                [
                    app_data / "pypoetry" / "venv" / "Scripts" / "poetry.exe",
                    app_data / "Roaming" / "Python" / "Scripts" / "poetry.exe",
                    app_data / "pypoetry" / "venv" / "Scripts" / "poetry",
                    app_data / "Python" / "scripts" / "poetry.exe",
                    app_data / "Python" / "scripts" / "poetry",
                ]
            )
        paths.append(home / ".local" / "bin" / "poetry")
    elif sys.platform == "darwin":
        paths.append(
            home / "Library" / "Application Support" / "pypoetry" / "venv" / "bin" / "poetry"
        )
        paths.append(home / ".local" / "bin" / "poetry")
    else:
        paths.append(home / ".local" / "share" / "pypoetry" / "venv" / "bin" / "poetry")
        paths.append(home / ".local" / "bin" / "poetry")
    return paths


@dataclass(frozen=True)
class PoetryManager:
    """The Poetry executable."""

    executable: Path

    @classmethod
    def find(
        cls, executable: Path | str | None, env_vars: PoetryEnvVariables
    ) -> PoetryManager | None:
        """Use ``executable`` if it is a file, else search the usual install places and PATH."""
        if executable is not None and Path(executable).is_file():
            return cls(Path(executable))

        home = env_vars.home
        if home is not None:
            for candidate in _search_paths(env_vars, home):
                if candidate.is_file():
                    return cls(candidate)

            if env_vars.path is not None:
                for entry in env_vars.path.split(os.pathsep):
                    candidate = Path(entry) / "poetry"
                    if candidate.is_file():
                        return cls(candidate)
                    if sys.platform == "win32":
                        candidate = Path(entry) / "poetry.exe"
                        if candidate.is_file():
                            return cls(candidate)

        logger.debug("Poetry exe not found")
        return None

    def to_manager(self) -> EnvManager:
        return EnvManager(executable=self.executable, version=None, tool=ManagerTool.POETRY)