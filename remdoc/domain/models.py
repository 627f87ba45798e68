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
# DOMAIN MODELS - CANONICAL CONTAINER MODEL & API RECORDS
# -----------------------------------------------------------------------------
# Two families of Pydantic models live here:
# - Canonical model: Container, PortMapping, DeployOptions. What callers see.
# - API records: one explicit record per Portainer request/response body,
#   serialized with the PascalCase keys the Docker API expects.
#
# Callers never build API records themselves; the Payload Builder and the
# Container Summarizer translate between the two families.
# -----------------------------------------------------------------------------

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PROTOCOL = "tcp"
DEFAULT_RESTART_POLICY = "unless-stopped"


# =============================================================================
# CANONICAL MODEL
# =============================================================================
class Container(BaseModel):
    """
    A container as reported by the remote Docker host.

    Produced by the Container Summarizer from raw API data. The id is the
    12-character short form Docker prints in `docker ps`.
    """

    id: str = Field(..., description="12-character short container id")
    name: str = Field("", description="Container name without the leading '/'")
    image: str = Field("", description="Image reference the container runs")
    state: str = Field("", description="Machine state (running, exited, created...)")
    status: str = Field("", description="Human status line (e.g. 'Up 2 minutes')")

    model_config = ConfigDict(frozen=True)


class PortMapping(BaseModel):
    """A host port published to a container port."""

    host_port: str = Field(..., description="Port on the host (e.g. '8080')")
    container_port: str = Field(..., description="Port in the container (e.g. '80')")
    protocol: str = Field(DEFAULT_PROTOCOL, description="'tcp' or 'udp'")

    @field_validator("protocol", mode="before")
    @classmethod
    def _default_protocol(cls, value: str | None) -> str:
        # An empty protocol means tcp, same as Docker itself
        return value or DEFAULT_PROTOCOL

    @property
    def key(self) -> str:
        """The '<containerPort>/<protocol>' key used by the Docker API."""
        return f"{self.container_port}/{self.protocol}"


class DeployOptions(BaseModel):
    """
    Everything needed to create and start one container.

    Fields:
    - name: Optional container name; the remote generates one when empty
    - image: Image reference, e.g. 'nginx:latest'
    - ports: Published ports, in the order given
    - env: Environment variables (key order is not preserved on the wire)
    - restart: Docker restart policy name
    - auto_remove: Remove the container once it stops
    """

    name: str = ""
    image: str = Field(..., min_length=1, description="Docker image to deploy")
    ports: list[PortMapping] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    restart: str = DEFAULT_RESTART_POLICY
    auto_remove: bool = False


# =============================================================================
# API RECORDS
# =============================================================================
class ApiRecord(BaseModel):
    """Base for wire records: PascalCase aliases, but constructible by field name."""

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        """Serialize with the remote's key names."""
        return self.model_dump(by_alias=True)


class EndpointRecord(ApiRecord):
    """One entry of GET /api/endpoints."""

    id: int = Field(..., alias="Id")
    name: str = Field("", alias="Name")


class RawContainer(ApiRecord):
    """One entry of GET /containers/json as Docker returns it."""

    id: str = Field(..., alias="Id")
    names: list[str] = Field(default_factory=list, alias="Names")
    image: str = Field("", alias="Image")
    state: str = Field("", alias="State")
    status: str = Field("", alias="Status")

    @field_validator("names", mode="before")
    @classmethod
    def _null_names(cls, value):
        return value or []


class PortBinding(ApiRecord):
    host_port: str = Field(..., alias="HostPort")


class RestartPolicy(ApiRecord):
    name: str = Field("", alias="Name")


class HostConfig(ApiRecord):
    port_bindings: dict[str, list[PortBinding]] = Field(
        default_factory=dict, alias="PortBindings"
    )
    restart_policy: RestartPolicy = Field(default_factory=RestartPolicy, alias="RestartPolicy")
    auto_remove: bool = Field(False, alias="AutoRemove")


class CreateContainerRequest(ApiRecord):
    """Body of POST /containers/create."""

    image: str = Field(..., alias="Image")
    exposed_ports: dict[str, dict] = Field(default_factory=dict, alias="ExposedPorts")
    env: list[str] = Field(default_factory=list, alias="Env")
    host_config: HostConfig = Field(default_factory=HostConfig, alias="HostConfig")


class CreateContainerResponse(ApiRecord):
    id: str = Field(..., alias="Id")
    warnings: list[str] | None = Field(None, alias="Warnings")


class StackCreateRequest(ApiRecord):
    """Body of POST /api/stacks for a compose stack given as a string."""

    name: str = Field(..., alias="Name")
    stack_file_content: str = Field(..., alias="StackFileContent")
    env: list[dict] = Field(default_factory=list, alias="Env")


class StackRecord(ApiRecord):
    id: int = Field(..., alias="Id")


class AuthRequest(ApiRecord):
    username: str
    password: str


class AuthResponse(ApiRecord):
    jwt: str = ""
