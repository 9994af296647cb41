"""Locating Homebrew installations and recognising Homebrew Python paths."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path, PurePath

# Homebrew install locations: Linux, macOS on Apple Silicon, macOS on Intel.
# More than one may be present, e.g. with Rosetta alongside Apple Silicon.
DEFAULT_HOMEBREW_BINS: tuple[Path, ...] = (
    Path("/home/linuxbrew/.linuxbrew/bin"),
    Path("/opt/homebrew/bin"),
    Path("/usr/local/bin"),
)

_HOMEBREW_ROOTS: tuple[PurePath, ...] = (
    PurePath("/opt/homebrew"),
    PurePath("/usr/local/Cellar"),
    PurePath("/home/linuxbrew/.linuxbrew"),
)

_PYTHON_VERSION = re.compile(r"/python@((\d+\.?)*)/")


@dataclass(frozen=True)
class HomebrewEnvVariables:
    """Homebrew settings read from the process environment."""

    home: Path | None
    root: Path | None
    path: str | None
    homebrew_prefix: str | None
    known_global_search_locations: tuple[Path, ...]

    @classmethod
    def from_environment(
        cls,
        environ: Mapping[str, str] | None = None,
        home: Path | None = None,
        root: Path | None = None,
        known_global_search_locations: Iterable[Path | str] = (),
    ) -> HomebrewEnvVariables:
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
        return cls(
            home=home,
            root=root,
            path=environ.get("PATH"),
            homebrew_prefix=environ.get("HOMEBREW_PREFIX"),
            known_global_search_locations=tuple(
                Path(p) for p in known_global_search_locations
            ),
        )


def get_homebrew_prefix_bin(
    env_vars: HomebrewEnvVariables,
    standard_bins: Iterable[Path | str] | None = None,
) -> list[Path]:
    """Existing Homebrew bin directories, plus ``$HOMEBREW_PREFIX/bin`` if it exists.

    ``standard_bins`` defaults to the documented Homebrew install locations.
    """
    candidates = DEFAULT_HOMEBREW_BINS if standard_bins is None else standard_bins
    bins = [Path(p) for p in candidates if Path(p).exists()]

    if env_vars.homebrew_prefix is not None:
        prefix_bin = Path(env_vars.homebrew_prefix) / "bin"
        if prefix_bin.exists() and prefix_bin not in bins:
            bins.append(prefix_bin)
    return bins


def is_homebrew_python(exe: Path | str) -> bool:
    """Whether ``exe`` lies inside one of the Homebrew install trees."""
    path = PurePath(exe)
    return any(path.is_relative_to(root) for root in _HOMEBREW_ROOTS)


def version_from_path(path: Path | str) -> str | None:
    """The version in a ``/python@<version>/`` component of ``path``, if any."""
    match = _PYTHON_VERSION.search(os.fspath(path))
    return match.group(1) if match else None