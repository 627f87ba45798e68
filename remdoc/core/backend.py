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
# BACKEND CONTRACT
# -----------------------------------------------------------------------------
# The capability interface every caller depends on. PortainerBackend is the
# one production implementation; tests provide their own fakes. Anything with
# these methods satisfies the contract, no inheritance required.
#
# Every operation takes `timeout` (seconds) bounding its network calls.
# None means "use the backend's default".
# -----------------------------------------------------------------------------

from typing import Protocol, runtime_checkable

from remdoc.domain.models import Container, DeployOptions


@runtime_checkable
class Backend(Protocol):
    """Container lifecycle on one remote Docker host."""

    def validate(self, timeout: float | None = None) -> None:
        """Check the credentials are accepted. Raises AuthError or BackendConnectionError."""
        ...

    def list_containers(self, timeout: float | None = None) -> list[Container]:
        """All containers, running and stopped, in the order the remote lists them."""
        ...

    def deploy_container(self, opts: DeployOptions, timeout: float | None = None) -> Container:
        """Create then start a container. The result reports state 'running'."""
        ...

    def remove_container(
        self, container_id: str, force: bool = False, timeout: float | None = None
    ) -> None:
        """Remove by id or name. `force` allows removing a running container."""
        ...

    def stop_container(self, container_id: str, timeout: float | None = None) -> None:
        ...

    def start_container(self, container_id: str, timeout: float | None = None) -> None:
        ...

    def deploy_compose_stack(
        self, name: str, compose_content: str, timeout: float | None = None
    ) -> int:
        """Create a stack from inline compose text and return its id."""
        ...
