"""Locating pyenv, its version directory and the version of pyenv itself."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from envscout.poetry_manager import EnvManager, ManagerTool

# Sample /opt/homebrew/Cellar/pyenv/2.4.0/libexec/pyenv
_VERSION_FROM_PATH = re.compile(r"pyenv/((\d+\.?)*)/")
_VERSION_FROM_VERSION_FILE = re.compile(r"(\d+\.\d+\.\d+)")

# Stable versions, like 3.10.10
_PURE_PYTHON_VERSION = re.compile(r"^(\d+\.\d+\.\d+)\Z")
# Dev versions, like 3.10-dev
_DEV_PYTHON_VERSION = re.compile(r"^(\d+\.\d+-.*)\Z")
# Alpha and rc versions, like 3.10.0a3
_BETA_PYTHON_VERSION = re.compile(r"^(\d+\.\d+.\d+\w\d+)")
# win32 versions, like 3.11.0a1-win32
_WIN32_PYTHON_VERSION = re.compile(r"^(\d+\.\d+.\d+\w\d+)-win32")


def _is_windows() -> bool:
    return sys.platform == "win32"


@dataclass(frozen=True)
class PyenvEnvVariables:
    """pyenv settings read from the process environment."""

    home: Path | None
    root: Path | None
    path: str | None
    pyenv_root: str | None
    pyenv: str | None
    known_global_search_locations: tuple[Path, ...]

    @classmethod
    def from_environment(
        cls,
        environ: Mapping[str, str] | None = None,
        home: Path | None = None,
        root: Path | None = None,
        known_global_search_locations: Iterable[Path | str] = (),
    ) -> PyenvEnvVariables:
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
            pyenv_root=environ.get("PYENV_ROOT"),
            pyenv=environ.get("PYENV"),
            known_global_search_locations=tuple(
                Path(p) for p in known_global_search_locations
            ),
        )


def get_home_pyenv_dir(env_vars: PyenvEnvVariables) -> Path | None:
    """The default pyenv directory under the user's home."""
    if env_vars.home is None:
        return None
    if _is_windows():
        return env_vars.home / ".pyenv" / "pyenv-win"
    return env_vars.home / ".pyenv"


def get_binary_from_known_paths(env_vars: PyenvEnvVariables) -> Path | None:
    """The first pyenv executable found in the known global search locations."""
    name = "pyenv.exe" if _is_windows() else "pyenv"
    for location in env_vars.known_global_search_locations:
        exe = location / name
        if exe.is_file():
            return exe
    return None


def get_pyenv_dir(env_vars: PyenvEnvVariables) -> Path | None:
    """The pyenv directory named by PYENV_ROOT, or else by PYENV."""
    if env_vars.pyenv_root is not None:
        return Path(env_vars.pyenv_root)
    if env_vars.pyenv is not None:
        return Path(env_vars.pyenv)
    return None


def get_pyenv_manager_version(
    pyenv_exe: Path | str, env_vars: PyenvEnvVariables
) -> str | None:
    """Work out the version of pyenv itself.

    On Windows it is read from the ``.version`` file; elsewhere from the
    path the pyenv executable links to.
    """
    if _is_windows():
        pyenv_dir = get_pyenv_dir(env_vars)
        if pyenv_dir is None:
            return None
        version_file = pyenv_dir / ".version"
        if not version_file.exists():
            # The directory may be ~/.pyenv/pyenv-win.
            version_file = pyenv_dir.parent / ".version"
            if not version_file.exists():
                return None
        try:
            contents = version_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None
        match = _VERSION_FROM_VERSION_FILE.search(contents)
        return match.group(1) if match else None

    try:
        real_path = os.readlink(pyenv_exe)
    except OSError:
        return None
    match = _VERSION_FROM_PATH.search(str(real_path))
    return match.group(1) if match else None


def version_from_folder_name(folder_name: str) -> str | None:
    """Guess a Python version from the name of a pyenv versions folder."""
    for pattern in (
        _PURE_PYTHON_VERSION,
        _DEV_PYTHON_VERSION,
        _BETA_PYTHON_VERSION,
        _WIN32_PYTHON_VERSION,
    ):
        match = pattern.search(folder_name)
        if match:
            return match.group(1)
    return None


@dataclass
class PyEnvInfo:
    """Where pyenv is installed and which version it is."""

    exe: Path | None = None
    versions: Path | None = None
    version: str | None = None

    @classmethod
    def from_env_vars(cls, env_vars: PyenvEnvVariables) -> PyEnvInfo:
        """Find pyenv from the variables, the known locations and the home directory."""
        info = cls()
        pyenv_dir = get_pyenv_dir(env_vars)
        if pyenv_dir is not None:
            versions = pyenv_dir / "versions"
            if versions.exists():
                info.versions = versions
            exe = pyenv_dir / "bin" / "pyenv"
            if exe.exists():
                info.exe = exe

        known = get_binary_from_known_paths(env_vars)
        if known is not None:
            info.exe = known

        if info.exe is None or info.versions is None:
            home_dir = get_home_pyenv_dir(env_vars)
            if home_dir is not None:
                if info.exe is None:
                    exe = home_dir / "bin" / "pyenv"
                    if exe.exists():
                        info.exe = exe
                if info.versions is None:
                    versions = home_dir / "versions"
                    if versions.exists():
                        info.versions = versions

        if info.exe is not None:
            info.version = get_pyenv_manager_version(info.exe, env_vars)
        return info

    def to_manager(self) -> EnvManager | None:
        """The pyenv manager, or None if no pyenv executable was found."""
        if self.exe is None:
            return None
        return EnvManager(executable=self.exe, version=self.version, tool=ManagerTool.PYENV)