"""Poetry project files and the names Poetry gives to project environments."""

from __future__ import annotations

import base64
import hashlib
import logging
import os
import re
import tomllib
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_SANITIZE_NAME = re.compile(r'[ $`!*@"\\\r\n\t]')


@dataclass(frozen=True)
class PyProjectToml:
    """The parts of a ``pyproject.toml`` that identify a Poetry project."""

    name: str
    file: Path

    @classmethod
    def find(cls, path: Path | str) -> PyProjectToml | None:
        """Read ``pyproject.toml`` in ``path``; None if absent or not a Poetry project."""
        file = Path(path) / "pyproject.toml"
        try:
            contents = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None
        return parse_pyproject(contents, file)


def parse_pyproject(contents: str, file: Path | str) -> PyProjectToml | None:
    """Parse ``contents`` and return the project if it names ``tool.poetry.name``."""
    try:
        value = tomllib.loads(contents)
    except tomllib.TOMLDecodeError as err:
        logger.error("Error parsing toml file: %s", err)
        return None
    tool = value.get("tool")
    poetry = tool.get("poetry") if isinstance(tool, dict) else None
    name = poetry.get("name") if isinstance(poetry, dict) else None
    if not isinstance(name, str):
        return None
    logger.debug("Poetry project: %s with name %s", file, name)
    return PyProjectToml(name=name, file=Path(file))


def generate_env_name(name: str, cwd: Path | str) -> str:
    """Return the prefix Poetry uses for virtual environments of a project."""
    sanitized = _SANITIZE_NAME.sub("_", name.lower())[:42]
    normalized_cwd = os.path.normcase(os.fspath(cwd))
    digest = hashlib.sha256(normalized_cwd.encode("utf-8")).digest()
    hashed = base64.urlsafe_b64encode(digest).decode("ascii")[:8]
    return f"{sanitized}-{hashed}-py"