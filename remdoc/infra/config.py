# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# LOCAL CONFIGURATION
# -----------------------------------------------------------------------------
# Responsibility: Persist the Portainer URL and JWT between CLI runs.
#
# Stored as JSON in ~/.remdoc/config.json:
#   {"portainer_url": "...", "jwt": "..."}
#
# The file holds a bearer token, so the directory is 0700 and the file 0600.
#
# Environment (a .env file is honoured too, see main.py):
# - REMDOC_CONFIG_DIR: Store the config somewhere other than ~/.remdoc
# - REMDOC_TIMEOUT: Default per-request timeout in seconds
# -----------------------------------------------------------------------------

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

CONFIG_DIR_NAME = ".remdoc"
CONFIG_FILE_NAME = "config.json"

DIR_MODE = 0o700
FILE_MODE = 0o600


class ConfigError(Exception):
    """Raised when the local config is missing, unreadable or invalid."""

    pass


class RemdocConfig(BaseModel):
    """What `remdoc login` saves and every other command loads."""

    portainer_url: str = Field(..., min_length=1, description="Portainer root URL")
    jwt: str = Field(..., min_length=1, description="Bearer token from /api/auth")


def config_dir() -> Path:
    override = os.getenv("REMDOC_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_DIR_NAME


def config_path() -> Path:
    return config_dir() / CONFIG_FILE_NAME


def load_config(path: Path | None = None) -> RemdocConfig:
    """
    Read the saved config.

    Raises:
        ConfigError: If there is no config yet or it can't be parsed.
    """
    path = path or config_path()

    try:
        data = json.loads(path.read_text())
    except FileNotFoundError:
        raise ConfigError("config not found (run 'remdoc login' first)")
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"failed to read config {path}: {e}")

    try:
        return RemdocConfig(**data)
    except (TypeError, ValidationError) as e:
        raise ConfigError(f"invalid config format in {path}: {e}")


def save_config(config: RemdocConfig, path: Path | None = None) -> Path:
    """
    Write the config with owner-only permissions.

    Returns:
        The path written to.
    """
    path = path or config_path()

    try:
        path.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)

        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

        # O_CREAT's mode is ignored for a file that already existed
        os.chmod(path, FILE_MODE)
    except OSError as e:
        raise ConfigError(f"failed to write config {path}: {e}")

    return path


def default_timeout(fallback: float) -> float:
    """Per-request timeout from REMDOC_TIMEOUT, or `fallback` if unset."""
    raw = os.getenv("REMDOC_TIMEOUT")
    if not raw:
        return fallback
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"REMDOC_TIMEOUT must be a number of seconds (got: {raw})")
    if value <= 0:
        raise ConfigError(f"REMDOC_TIMEOUT must be positive (got: {raw})")
    return value
