import os
from dataclasses import replace
from pathlib import Path

from envscout.poetry_env import PoetryEnvVariables
from envscout.poetry_manager import EnvManager, ManagerTool, PoetryManager


def make_env(home, **overrides) -> PoetryEnvVariables:
    env = PoetryEnvVariables(
        home=home,
        root=None,
        app_data=None,
        poetry_virtualenvs_path=None,
        poetry_home=None,
        poetry_config_dir=None,
        poetry_cache_dir=None,
        poetry_virtualenvs_in_project=None,
        path=None,
    )
    return replace(env, **overrides)


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")
    return path


def test_given_executable_is_used(tmp_path):
    exe = touch(tmp_path / "custom" / "poetry")
    manager = PoetryManager.find(exe, make_env(None))
    assert manager == PoetryManager(exe)


def test_given_executable_that_is_a_directory_is_ignored(tmp_path):
    folder = tmp_path / "dir"
    folder.mkdir()
    assert PoetryManager.find(folder, make_env(None)) is None


def test_nothing_found_without_home(tmp_path):
    exe_dir = tmp_path / "bin"
    touch(exe_dir / "poetry")
    assert PoetryManager.find(None, make_env(None, path=str(exe_dir))) is None


def test_found_in_dot_poetry(tmp_path):
    exe = touch(tmp_path / ".poetry" / "bin" / "poetry")
    assert PoetryManager.find(None, make_env(tmp_path)).executable == exe


def test_found_in_pipx_venv(tmp_path):
    exe = touch(tmp_path / ".local" / "pipx" / "venvs" / "poetry" / "bin" / "poetry")
    assert PoetryManager.find(None, make_env(tmp_path)).executable == exe


def test_found_in_poetry_home(tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    poetry_home = tmp_path / "poetry_home"
    exe = touch(poetry_home / "venv" / "bin" / "poetry")
    manager = PoetryManager.find(None, make_env(home, poetry_home=poetry_home))
    assert manager.executable == exe


def test_found_in_local_bin(tmp_path):
    exe = touch(tmp_path / ".local" / "bin" / "poetry")
    assert PoetryManager.find(None, make_env(tmp_path)).executable == exe


def test_found_on_path(tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    first = tmp_path / "first"
    first.mkdir()
    second = tmp_path / "second"
    exe = touch(second / "poetry")
    path = os.pathsep.join([str(first), str(second)])
    assert PoetryManager.find(None, make_env(home, path=path)).executable == exe


def test_home_locations_take_precedence_over_path(tmp_path):
    home = tmp_path / "home"
    preferred = touch(home / ".poetry" / "bin" / "poetry")
    on_path = tmp_path / "onpath"
    touch(on_path / "poetry")
    manager = PoetryManager.find(None, make_env(home, path=str(on_path)))
    assert manager.executable == preferred


def test_not_found(tmp_path):
    assert PoetryManager.find(None, make_env(tmp_path, path=str(tmp_path / "x"))) is None


def test_missing_given_executable_falls_back(tmp_path):
    exe = touch(tmp_path / ".poetry" / "bin" / "poetry")
    manager = PoetryManager.find(tmp_path / "absent", make_env(tmp_path))
    assert manager.executable == exe


def test_to_manager(tmp_path):
    exe = tmp_path / "poetry"
    manager = PoetryManager(exe).to_manager()
    assert manager == EnvManager(executable=exe, version=None, tool=ManagerTool.POETRY)