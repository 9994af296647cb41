"""Environment variables that affect how Pipenv projects are found."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

_DEFAULT_MAX_DEPTH = 3
_DEFAULT_PIPFILE = "Pipfile"
_UNSIGNED = re.compile(r"\+?[0-9]+")
_U16_MAX = 0xFFFF


def _parse_max_depth(value: str | None) -> int:
    if value is None or not _UNSIGNED.fullmatch(value):
        return _DEFAULT_MAX_DEPTH
    depth = int(value)
    return depth if depth <= _U16_MAX else _DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class PipenvEnvVariables:
    """Pipenv settings read from the process environment."""

    pipenv_max_depth: int
    pipenv_pipfile: str

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> PipenvEnvVariables:
        """Read the variables from ``environ`` (the process environment by default)."""
        if environ is None:
            environ = os.environ
        return cls(
            pipenv_max_depth=_parse_max_depth(environ.get("PIPENV_MAX_DEPTH")),
            pipenv_pipfile=environ.get("PIPENV_PIPFILE", _DEFAULT_PIPFILE),
        )