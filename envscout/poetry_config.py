"""Reading Poetry's global and project configuration files."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path

import platformdirs

from envscout.poetry_env import PoetryEnvVariables

logger = logging.getLogger(__name__)

_APP_NAME = "pypoetry"
_CACHE_DIR_PLACEHOLDER = "{cache-dir}"


@dataclass(frozen=True)
class ConfigToml:
    """Settings found in a single Poetry configuration file."""

    virtualenvs_in_project: bool | None = None
    cache_dir: Path | None = None
    virtualenvs_path: Path | None = None


@dataclass(frozen=True)
class PoetryConfig:
    """Effective Poetry configuration after applying files, variables and defaults."""

    virtualenvs_in_project: bool | None
    virtualenvs_path: Path
    cache_dir: Path | None
    file: Path | None

    @classmethod
    def find_global(cls, env: PoetryEnvVariables) -> PoetryConfig | None:
        """Build the configuration from the user's global ``config.toml``."""
        return _create_config(find_config_file(env), env)

    @classmethod
    def find_local(cls, path: Path | str, env: PoetryEnvVariables) -> PoetryConfig | None:
        """Build the configuration from ``poetry.toml`` in a project directory."""
        file = Path(path) / "poetry.toml"
        if not file.is_file():
            return None
        return _create_config(file, env)


def _make_config(
    file: Path | None,
    virtualenvs_path: Path,
    cache_dir: Path | None,
    virtualenvs_in_project: bool | None,
) -> PoetryConfig:
    logger.debug(
        "Poetry config file => %s, virtualenv.path => %s, cache_dir => %s, "
        "virtualenvs_in_project => %s",
        file,
        virtualenvs_path,
        cache_dir,
        virtualenvs_in_project,
    )
    return PoetryConfig(
        virtualenvs_in_project=virtualenvs_in_project,
        virtualenvs_path=virtualenvs_path,
        cache_dir=cache_dir,
        file=file,
    )


def _create_config(file: Path | None, env: PoetryEnvVariables) -> PoetryConfig | None:
    cfg = parse_config_file(file) if file is not None else None
    cache_dir = _get_cache_dir(cfg, env)
    in_project = cfg.virtualenvs_in_project if cfg is not None else None

    from_env_var = None
    if env.poetry_virtualenvs_path is not None:
        from_env_var = resolve_virtualenvs_path(env.poetry_virtualenvs_path, cache_dir)

    if cfg is not None and cfg.virtualenvs_path is not None:
        logger.debug("Poetry virtualenvs path => %s", cfg.virtualenvs_path)
        resolved = resolve_virtualenvs_path(cfg.virtualenvs_path, cache_dir)
        # The environment variable takes precedence over the file.
        return _make_config(
            file,
            from_env_var if from_env_var is not None else resolved,
            cache_dir,
            in_project,
        )

    if from_env_var is not None and from_env_var.exists():
        return _make_config(file, from_env_var, cache_dir, in_project)

    if cache_dir is None:
        return None
    return _make_config(file, cache_dir / "virtualenvs", cache_dir, None)


def resolve_virtualenvs_path(
    virtualenvs_path: Path | str, cache_dir: Path | str | None
) -> Path:
    """Replace ``{cache-dir}`` in ``virtualenvs_path`` with ``cache_dir``."""
    text = str(virtualenvs_path)
    if _CACHE_DIR_PLACEHOLDER in text.lower() and cache_dir is not None:
        replaced = Path(text.replace(_CACHE_DIR_PLACEHOLDER, str(cache_dir)))
        logger.debug("Poetry virtualenvs path after replacing cache-dir => %s", replaced)
        return replaced
    return Path(virtualenvs_path)


def _get_cache_dir(cfg: ConfigToml | None, env: PoetryEnvVariables) -> Path | None:
    if env.poetry_cache_dir is not None and env.poetry_cache_dir.is_dir():
        return env.poetry_cache_dir
    if cfg is not None and cfg.cache_dir is not None and cfg.cache_dir.is_dir():
        return cfg.cache_dir
    return platformdirs.user_cache_path(_APP_NAME, appauthor=False)


def _get_config_dir(env: PoetryEnvVariables) -> Path | None:
    if env.poetry_config_dir is not None and env.poetry_config_dir.is_dir():
        return env.poetry_config_dir
    return platformdirs.user_config_path(_APP_NAME, appauthor=False, roaming=True)


def find_config_file(env: PoetryEnvVariables) -> Path | None:
    """Return the global ``config.toml`` if it exists."""
    config_dir = _get_config_dir(env)
    if config_dir is None:
        return None
    file = config_dir / "config.toml"
    return file if file.exists() else None


def parse_config_file(file: Path | str) -> ConfigToml | None:
    """Read and parse a Poetry configuration file; None if unreadable or invalid."""
    try:
        contents = Path(file).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return parse_config_contents(contents)


def parse_config_contents(contents: str) -> ConfigToml | None:
    """Parse the text of a Poetry configuration file; None if it is not TOML."""
    try:
        value = tomllib.loads(contents)
    except tomllib.TOMLDecodeError as err:
        logger.error("Error parsing poetry toml file: %s", err)
        return None

    virtualenvs_path = None
    cache_dir = None
    in_project = None

    virtualenvs = value.get("virtualenvs")
    if isinstance(virtualenvs, dict):
        path = virtualenvs.get("path")
        if isinstance(path, str):
            virtualenvs_path = Path(path.strip())
        flag = virtualenvs.get("in-project")
        if isinstance(flag, bool):
            in_project = flag

    cache_value = value.get("cache-dir")
    if isinstance(cache_value, str):
        cache_dir = Path(cache_value.strip())
        if virtualenvs_path is None:
            virtualenvs_path = cache_dir / "virtualenvs"

    return ConfigToml(
        virtualenvs_in_project=in_project,
        cache_dir=cache_dir,
        virtualenvs_path=virtualenvs_path,
    )