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
# INPUT PARSING
# -----------------------------------------------------------------------------
# Responsibility: Turn operator input into deploy parameters before anything
# is sent to the control plane.
#
# - Ports:   "8080:80" or "5353:53/udp"
# - Env:     "KEY=value" (split on the first '=')
# - Compose: a local YAML file, name defaults to the file stem
#
# Malformed input raises InputValidationError.
# -----------------------------------------------------------------------------

import re
from pathlib import Path

import yaml

from remdoc.core.errors import InputValidationError
from remdoc.domain.models import DEFAULT_PROTOCOL, PortMapping

ALLOWED_PROTOCOLS = ("tcp", "udp")
PORT_PATTERN = re.compile(r"^\d{1,5}$")


def parse_port(raw: str) -> PortMapping:
    """
    Parse one 'HOST:CONTAINER[/PROTOCOL]' port mapping.

    Raises:
        InputValidationError: If the mapping is not in that format.
    """
    parts = raw.split(":")
    if len(parts) != 2:
        raise InputValidationError(f"port must be in format HOST:CONTAINER (got: {raw})")

    host_port, container_part = parts
    container_port, _, protocol = container_part.partition("/")
    protocol = (protocol or DEFAULT_PROTOCOL).lower()

    if not PORT_PATTERN.match(host_port) or not PORT_PATTERN.match(container_port):
        raise InputValidationError(f"ports must be numeric (got: {raw})")
    if protocol not in ALLOWED_PROTOCOLS:
        raise InputValidationError(f"protocol must be tcp or udp (got: {raw})")

    return PortMapping(host_port=host_port, container_port=container_port, protocol=protocol)


def parse_ports(items: list[str]) -> list[PortMapping]:
    return [parse_port(raw) for raw in items]


def parse_env(items: list[str]) -> dict[str, str]:
    """
    Parse 'KEY=value' pairs. A later duplicate key overrides an earlier one.

    Raises:
        InputValidationError: If an entry has no '=' or an empty key.
    """
    env: dict[str, str] = {}
    for raw in items:
        key, sep, value = raw.partition("=")
        if not sep or not key:
            raise InputValidationError(f"env var must be in format KEY=value (got: {raw})")
        env[key] = value
    return env


def load_compose_file(path: Path, name: str | None = None) -> tuple[str, str]:
    """
    Read a compose file for stack deployment.

    Args:
        path: The docker-compose file.
        name: Stack name; defaults to the file name without extension.

    Returns:
        (stack_name, file_content). The content is returned verbatim.

    Raises:
        InputValidationError: If the file can't be read or isn't a YAML mapping.
    """
    try:
        content = path.read_text()
    except OSError as e:
        raise InputValidationError(f"failed to read compose file: {e}") from e

    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise InputValidationError(f"compose file is not valid YAML: {e}") from e

    if not isinstance(document, dict):
        raise InputValidationError(f"compose file {path} does not contain a YAML mapping")

    stack_name = (name or "").strip() or path.stem
    return stack_name, content
