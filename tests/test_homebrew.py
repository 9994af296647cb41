from pathlib import Path

import pytest

from envscout.homebrew import (
    HomebrewEnvVariables,
    get_homebrew_prefix_bin,
    is_homebrew_python,
    version_from_path,
)


def _vars(prefix=None):
    return HomebrewEnvVariables(
        home=Path("/home/someone"),
        root=None,
        path=None,
        homebrew_prefix=prefix,
        known_global_search_locations=(),
    )


def test_from_environment_reads_variables(tmp_path):
    env = HomebrewEnvVariables.from_environment(
        {"PATH": "/usr/bin", "HOMEBREW_PREFIX": "/opt/homebrew"},
        home=tmp_path,
        root=None,
        known_global_search_locations=["/usr/local/bin"],
    )
    assert env.home == tmp_path
    assert env.root is None
    assert env.path == "/usr/bin"
    assert env.homebrew_prefix == "/opt/homebrew"
    assert env.known_global_search_locations == (Path("/usr/local/bin"),)


def test_from_environment_missing_variables(tmp_path):
    env = HomebrewEnvVariables.from_environment({}, home=tmp_path)
    assert env.path is None
    assert env.homebrew_prefix is None
    assert env.known_global_search_locations == ()


def test_prefix_bin_keeps_only_existing(tmp_path):
    present = tmp_path / "a" / "bin"
    present.mkdir(parents=True)
    missing = tmp_path / "b" / "bin"
    result = get_homebrew_prefix_bin(_vars(), [present, missing])
    assert result == [present]


def test_prefix_bin_adds_env_prefix(tmp_path):
    standard = tmp_path / "std" / "bin"
    standard.mkdir(parents=True)
    prefix = tmp_path / "brew"
    (prefix / "bin").mkdir(parents=True)
    result = get_homebrew_prefix_bin(_vars(str(prefix)), [standard])
    assert result == [standard, prefix / "bin"]


def test_prefix_bin_does_not_duplicate(tmp_path):
    prefix = tmp_path / "brew"
    (prefix / "bin").mkdir(parents=True)
    result = get_homebrew_prefix_bin(_vars(str(prefix)), [prefix / "bin"])
    assert result == [prefix / "bin"]


def test_prefix_bin_ignores_missing_env_prefix(tmp_path):
    result = get_homebrew_prefix_bin(_vars(str(tmp_path / "nothing")), [])
    assert result == []


@pytest.mark.parametrize(
    "exe",
    [
        "/opt/homebrew/Cellar/python@3.12/3.12.3/Frameworks/Python.framework/Versions/3.12/bin/python3.12",
        "/usr/local/Cellar/python@3.8/3.8.19/Frameworks/Python.framework/Versions/3.8/bin/python3.8",
        "/home/linuxbrew/.linuxbrew/Cellar/python@3.12/3.12.3/bin/python3.12",
    ],
)
def test_is_homebrew_python_true(exe):
    assert is_homebrew_python(Path(exe)) is True


@pytest.mark.parametrize(
    "exe",
    ["/usr/local/bin/python3.8", "/usr/bin/python3", "/opt/homebrewx/bin/python3"],
)
def test_is_homebrew_python_false(exe):
    assert is_homebrew_python(exe) is False


def test_version_from_path_cellar():
    path = "/opt/homebrew/Cellar/python@3.12/3.12.3/Frameworks/Python.framework/Versions/3.12/bin/python3.12"
    assert version_from_path(path) == "3.12"


def test_version_from_path_intel():
    path = "/usr/local/Cellar/python@3.8/3.8.19/bin/python3.8"
    assert version_from_path(Path(path)) == "3.8"


def test_version_from_path_absent():
    assert version_from_path("/usr/local/bin/python3.8") is None
    assert version_from_path("/opt/homebrew/bin/python@3.12") is None