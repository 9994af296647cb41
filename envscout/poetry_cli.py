"""Asking the Poetry command line for its environments and settings."""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_ACTIVATED_SUFFIX = " (Activated)"


@dataclass(frozen=True)
class PoetryCliConfig:
    """Settings as reported by ``poetry config``."""

    cache_dir: Path | None
    virtualenvs_in_project: bool | None
    virtualenvs_path: Path | None


def _strip_activated(line: str) -> str:
    while line.endswith(_ACTIVATED_SUFFIX):
        line = line[: -len(_ACTIVATED_SUFFIX)]
    return line.strip()


def parse_env_list(output: str) -> list[Path]:
    """Parse the output of ``poetry env list --full-path`` into environment paths."""
    paths = []
    for raw in output.split("\n"):
        line = _strip_activated(raw.removesuffix("\r"))
        if line:
            paths.append(Path(line))
    return paths


def _run(executable: Path | str, args: list[str], project_dir: Path | str):
    start = time.monotonic()
    try:
        result = subprocess.run(
            [str(executable), *args],
            cwd=project_dir,
            capture_output=True,
        )
    except OSError as err:
        logger.error("Failed to execute Poetry %s: %s", " ".join(args), err)
        return None
    logger.debug(
        "Executed Poetry (%dms): %s %s for %s",
        int((time.monotonic() - start) * 1000),
        executable,
        " ".join(args),
        project_dir,
    )
    return result


def get_environments(executable: Path | str, project_dir: Path | str) -> list[Path] | None:
    """List the environments Poetry knows for ``project_dir``; None if the command fails."""
    result = _run(executable, ["env", "list", "--full-path"], project_dir)
    if result is None:
        return None
    if result.returncode != 0:
        logger.debug(
            "Failed to get Poetry Envs using exe %s (%s) %s",
            executable,
            result.returncode,
            result.stderr.decode("utf-8", errors="replace"),
        )
        return None
    return parse_env_list(result.stdout.decode("utf-8", errors="replace"))


def get_config_value(
    executable: Path | str, project_dir: Path | str, setting: str
) -> str | None:
    """Return the raw output of ``poetry config <setting>``; None if the command fails."""
    result = _run(executable, ["config", setting], project_dir)
    if result is None:
        return None
    if result.returncode != 0:
        logger.debug(
            "Failed to get Poetry config %s using exe %s in %s, due to (%s) %s",
            setting,
            executable,
            project_dir,
            result.returncode,
            result.stderr.decode("utf-8", errors="replace"),
        )
        return None
    return result.stdout.decode("utf-8", errors="replace")


def _get_config_bool(
    executable: Path | str, project_dir: Path | str, setting: str
) -> bool | None:
    output = get_config_value(executable, project_dir, setting)
    if output is None:
        return None
    output = output.strip()
    if output.startswith("true"):
        return True
    if output.startswith("false"):
        return False
    return None


def _get_config_path(
    executable: Path | str, project_dir: Path | str, setting: str
) -> Path | None:
    output = get_config_value(executable, project_dir, setting)
    return None if output is None else Path(output.strip())


def get_config(executable: Path | str, project_dir: Path | str) -> PoetryCliConfig:
    """Query Poetry for the cache directory and virtualenv settings of a project."""
    cache_dir = _get_config_path(executable, project_dir, "cache-dir")
    virtualenvs_path = _get_config_path(executable, project_dir, "virtualenvs.path")
    in_project = _get_config_bool(executable, project_dir, "virtualenvs.in-project")
    return PoetryCliConfig(
        cache_dir=cache_dir,
        virtualenvs_in_project=in_project,
        virtualenvs_path=virtualenvs_path,
    )