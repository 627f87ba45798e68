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
# PORTAINER BACKEND - CONTROL-PLANE ADAPTER
# -----------------------------------------------------------------------------
# Responsibility: Implement the Backend contract on top of Portainer's REST API.
#
# Every operation follows the same path:
# 1. Resolve the endpoint (for endpoint-scoped operations)
# 2. Build the URL and, for writes, the JSON body
# 3. One authenticated HTTP call, within what is left of the caller's timeout
# 4. Classify the response
# 5. Decode and normalize into the canonical model
#
# deploy_container is create-then-start WITHOUT rollback. If start fails the
# container is left created but stopped, and the error goes to the caller.
# Whether to compensate with a delete is a product decision not taken here.
# -----------------------------------------------------------------------------

from http import HTTPStatus
from urllib.parse import quote

import requests

from remdoc.core.classifier import check_authenticated, decode
from remdoc.core.endpoints import EndpointResolver
from remdoc.core.errors import InputValidationError, operation
from remdoc.core.payloads import build_create_container_request, build_stack_request
from remdoc.core.summarizer import short_id, summarize_containers
from remdoc.domain.models import (
    Container,
    CreateContainerResponse,
    DeployOptions,
    RawContainer,
    StackRecord,
)
from remdoc.infra.http_client import DEFAULT_TIMEOUT_SECONDS, Deadline, PortainerTransport

STATUS_PATH = "/api/status"
STACKS_PATH = "/api/stacks"

# Portainer stack type 2 = standalone Docker Compose
COMPOSE_STACK_TYPE = 2

STATE_RUNNING = "running"


class PortainerBackend:
    """
    Container backend driving a Docker host through Portainer.

    Holds one immutable session (base URL + bearer token) for its lifetime.
    Safe to share between threads as far as the session goes, but operations
    on the same container are not serialized.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
        resolver: EndpointResolver | None = None,
        verbose: bool = False,
    ) -> None:
        """
        Args:
            base_url: Portainer root URL. A trailing '/' is ignored.
            token: JWT obtained from /api/auth.
            timeout: Seconds per operation when the caller passes none.
            session: Optional requests session to send through.
            resolver: Endpoint selection; defaults to "first endpoint wins".
            verbose: Trace every request on stderr.
        """
        self._transport = PortainerTransport(
            base_url, token, timeout=timeout, session=session, verbose=verbose
        )
        self._resolver = resolver or EndpointResolver()

    @property
    def base_url(self) -> str:
        return self._transport.base_url

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "PortainerBackend":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # CONTRACT OPERATIONS
    # -------------------------------------------------------------------------
    def validate(self, timeout: float | None = None) -> None:
        """
        Confirm the token is accepted by the control plane.

        Raises:
            AuthError: On 401.
            BackendConnectionError: If Portainer is unreachable.
            ProtocolError: On any other non-200 answer.
        """
        with operation("failed to validate session"):
            deadline = self._deadline(timeout)
            response = self._transport.request(
                "GET", STATUS_PATH, timeout=deadline.remaining()
            )
            check_authenticated(response, HTTPStatus.OK)

    def list_containers(self, timeout: float | None = None) -> list[Container]:
        with operation("failed to list containers"):
            deadline = self._deadline(timeout)
            endpoint_id = self._endpoint_id(deadline)

            response = self._transport.request(
                "GET",
                f"{self._docker_path(endpoint_id)}/containers/json",
                params={"all": "true"},
                timeout=deadline.remaining(),
            )
            check_authenticated(response, HTTPStatus.OK)

            raws = decode(response, list[RawContainer] | None) or []
            return summarize_containers(raws)

    def deploy_container(self, opts: DeployOptions, timeout: float | None = None) -> Container:
        """
        Create and start a container.

        All three requests (endpoint lookup, create, start) share one
        timeout budget.

        Returns:
            The new container with state 'running'.

        Raises:
            BackendError: From either step. A failed start leaves the created
                container in place.
        """
        with operation("failed to deploy container"):
            deadline = self._deadline(timeout)
            endpoint_id = self._endpoint_id(deadline)

            with operation("failed to create container"):
                container_id = self._create_container(endpoint_id, opts, deadline)

            # No compensating delete on failure here
            with operation("failed to start container"):
                self._start_container(endpoint_id, container_id, deadline)

            return Container(
                id=short_id(container_id),
                name=opts.name,
                image=opts.image,
                state=STATE_RUNNING,
            )

    def remove_container(
        self, container_id: str, force: bool = False, timeout: float | None = None
    ) -> None:
        with operation(f"failed to remove container {container_id}"):
            deadline = self._deadline(timeout)
            endpoint_id = self._endpoint_id(deadline)

            response = self._transport.request(
                "DELETE",
                self._container_path(endpoint_id, container_id),
                params={"force": "true" if force else "false"},
                timeout=deadline.remaining(),
            )
            check_authenticated(response, HTTPStatus.NO_CONTENT, HTTPStatus.OK)

    def stop_container(self, container_id: str, timeout: float | None = None) -> None:
        with operation(f"failed to stop container {container_id}"):
            deadline = self._deadline(timeout)
            endpoint_id = self._endpoint_id(deadline)

            response = self._transport.request(
                "POST",
                f"{self._container_path(endpoint_id, container_id)}/stop",
                timeout=deadline.remaining(),
            )
            check_authenticated(response, HTTPStatus.NO_CONTENT, HTTPStatus.NOT_MODIFIED)

    def start_container(self, container_id: str, timeout: float | None = None) -> None:
        with operation(f"failed to start container {container_id}"):
            deadline = self._deadline(timeout)
            endpoint_id = self._endpoint_id(deadline)
            self._start_container(endpoint_id, container_id, deadline)

    def deploy_compose_stack(
        self, name: str, compose_content: str, timeout: float | None = None
    ) -> int:
        """
        Deploy a compose file as a Portainer stack.

        Name and content are checked locally first; nothing is sent if either
        is blank.

        Returns:
            The stack id assigned by Portainer.
        """
        with operation("failed to deploy stack"):
            if not name.strip():
                raise InputValidationError("stack name cannot be empty")
            if not compose_content.strip():
                raise InputValidationError("compose content cannot be empty")

            deadline = self._deadline(timeout)
            endpoint_id = self._endpoint_id(deadline)

            response = self._transport.request(
                "POST",
                STACKS_PATH,
                params={"type": COMPOSE_STACK_TYPE, "method": "string", "endpointId": endpoint_id},
                payload=build_stack_request(name, compose_content).to_payload(),
                timeout=deadline.remaining(),
            )
            check_authenticated(response, HTTPStatus.CREATED, HTTPStatus.OK)

            return decode(response, StackRecord).id

    # -------------------------------------------------------------------------
    # HELPERS
    # -------------------------------------------------------------------------
    def _deadline(self, timeout: float | None) -> Deadline:
        return Deadline(timeout if timeout is not None else self._transport.timeout)

    def _endpoint_id(self, deadline: Deadline) -> int:
        with operation("failed to get endpoint"):
            return self._resolver.resolve(self._transport, deadline.remaining())

    def _docker_path(self, endpoint_id: int) -> str:
        return f"/api/endpoints/{endpoint_id}/docker"

    def _container_path(self, endpoint_id: int, container_id: str) -> str:
        return f"{self._docker_path(endpoint_id)}/containers/{quote(container_id, safe='')}"

    def _create_container(self, endpoint_id: int, opts: DeployOptions, deadline: Deadline) -> str:
        """POST /containers/create and return the full container id."""
        response = self._transport.request(
            "POST",
            f"{self._docker_path(endpoint_id)}/containers/create",
            params={"name": opts.name} if opts.name else None,
            payload=build_create_container_request(opts).to_payload(),
            timeout=deadline.remaining(),
        )
        check_authenticated(response, HTTPStatus.CREATED, HTTPStatus.OK)

        return decode(response, CreateContainerResponse).id

    def _start_container(self, endpoint_id: int, container_id: str, deadline: Deadline) -> None:
        response = self._transport.request(
            "POST",
            f"{self._container_path(endpoint_id, container_id)}/start",
            timeout=deadline.remaining(),
        )
        check_authenticated(response, HTTPStatus.NO_CONTENT, HTTPStatus.NOT_MODIFIED)
