# envscout

envscout is a library of building blocks for finding Python environments made by
common tools. It covers:

- **Poetry** (`envscout.poetry_env`, `envscout.poetry_config`,
  `envscout.poetry_project`, `envscout.poetry_manager`, `envscout.poetry_cli`):
  it reads Poetry's environment variables and its global `config.toml` and
  project `poetry.toml`, reads the project name from `pyproject.toml`, works out
  the virtualenv name prefix Poetry gives a project, finds the `poetry`
  executable, and can run `poetry env list --full-path` and `poetry config`
  to ask Poetry directly.
- **pyenv** (`envscout.pyenv`): it finds the pyenv directory, the pyenv
  executable and pyenv's own version, and guesses interpreter versions from
  folder names such as `3.10.10`, `3.13-dev` or `3.12.1a3`.
- **Pipenv** (`envscout.pipenv_env`): it reads `PIPENV_MAX_DEPTH` (default 3)
  and `PIPENV_PIPFILE` (default `Pipfile`).
- **Homebrew** (`envscout.homebrew`): it lists existing Homebrew `bin`
  directories, tells whether a path lies in a Homebrew install tree, and reads
  the version from a `python@<version>` path component.

It also has a small JSON-RPC layer with `Content-Length` framing
(`envscout.jsonrpc`, `envscout.jsonrpc_server`).

## Installation

```
pip install envscout
```

Python 3.11 or later is required.

## Examples

### Poetry virtualenv names

```python
from envscout.poetry_project import generate_env_name

generate_env_name("poetry-demo", "/Users/me/projects/poetry-demo")
# 'poetry-demo-<8 characters of hash>-py'
```

### Poetry configuration

```python
from envscout.poetry_env import PoetryEnvVariables
from envscout.poetry_config import PoetryConfig

env = PoetryEnvVariables.from_environment()  # os.environ and the user's home
config = PoetryConfig.find_global(env)
if config is not None:
    print(config.file, config.virtualenvs_path, config.virtualenvs_in_project)
```

`PoetryConfig.find_local(project_dir, env)` does the same for a project's
`poetry.toml`, and returns None when there is none.

### Finding the Poetry executable

```python
from envscout.poetry_manager import PoetryManager

manager = PoetryManager.find(None, env)
if manager is not None:
    print(manager.to_manager())   # EnvManager(executable=..., version=None, tool=ManagerTool.POETRY)
```

### Asking Poetry itself

```python
from envscout.poetry_cli import get_config, get_environments

get_environments(manager.executable, "/path/to/project")  # list of Paths, or None on failure
get_config(manager.executable, "/path/to/project")        # PoetryCliConfig
```

### pyenv

```python
from envscout.pyenv import PyenvEnvVariables, PyEnvInfo, version_from_folder_name

env_vars = PyenvEnvVariables.from_environment()
info = PyEnvInfo.from_env_vars(env_vars)
print(info.exe, info.versions, info.version)
print(info.to_manager())

version_from_folder_name("3.10-dev")   # '3.10-dev'
version_from_folder_name("3.12.1a3")   # '3.12.1a3'
```

### Homebrew

```python
from envscout.homebrew import (
    HomebrewEnvVariables, get_homebrew_prefix_bin, is_homebrew_python, version_from_path,
)

get_homebrew_prefix_bin(HomebrewEnvVariables.from_environment())
is_homebrew_python("/opt/homebrew/bin/python3.12")  # True
version_from_path("/opt/homebrew/Cellar/python@3.12/3.12.3/bin/python3.12")  # '3.12'
```

### JSON-RPC

```python
import sys
from envscout.jsonrpc import send_reply
from envscout.jsonrpc_server import HandlerRegistry, start_server

registry = HandlerRegistry(context={}, output=sys.stdout)
registry.add_request_handler(
    "ping", lambda ctx, request_id, params: send_reply(request_id, "pong", sys.stdout)
)
start_server(registry)  # reads framed messages from standard input until it ends
```

A request to a method that has no handler gets a JSON-RPC error reply (code -1).
A notification to such a method gets an error message with a null `id`
(code -2), and a message without a method gets code -3.

## What it does not do

envscout provides the pieces above, not a finished discovery tool. There is no
command-line program, no locator that walks all these tools and reports a
combined list of environments, and no ready-made JSON-RPC server with discovery
methods: you register the handlers yourself. It does not resolve Homebrew
symlinks into full environment records, and it never starts a Python
interpreter to find its version.