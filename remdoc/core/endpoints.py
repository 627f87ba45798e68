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
# ENDPOINT RESOLVER
# -----------------------------------------------------------------------------
# Responsibility: Find the Docker environment that container operations target.
#
# Portainer can manage many environments ("endpoints"). We always take the
# first one it lists. There is no cache: every call re-reads the listing, so
# a topology change on the control plane is picked up by the next operation.
#
# The selection policy is the seam for multi-endpoint support.
# -----------------------------------------------------------------------------

from collections.abc import Callable, Sequence
from http import HTTPStatus

from remdoc.core.classifier import check_authenticated, decode
from remdoc.core.errors import NoEndpointsError
from remdoc.domain.models import EndpointRecord
from remdoc.infra.http_client import PortainerTransport

ENDPOINTS_PATH = "/api/endpoints"

SelectionPolicy = Callable[[Sequence[EndpointRecord]], EndpointRecord]


def first_endpoint(endpoints: Sequence[EndpointRecord]) -> EndpointRecord:
    """Default policy: whichever environment the control plane lists first."""
    return endpoints[0]


class EndpointResolver:
    """Resolves the numeric id of the endpoint to operate on."""

    def __init__(self, select: SelectionPolicy = first_endpoint) -> None:
        self._select = select

    def resolve(self, transport: PortainerTransport, timeout: float | None = None) -> int:
        """
        List registered endpoints and pick one.

        Returns:
            The selected endpoint's id.

        Raises:
            NoEndpointsError: If nothing is registered.
            AuthError, ProtocolError, BackendConnectionError: From the listing call.
        """
        response = transport.request("GET", ENDPOINTS_PATH, timeout=timeout)
        check_authenticated(response, HTTPStatus.OK)

        # A JSON null listing means no endpoints, same as []
        endpoints = decode(response, list[EndpointRecord] | None) or []
        if not endpoints:
            raise NoEndpointsError("no Docker endpoints configured in Portainer")

        return self._select(endpoints).id
