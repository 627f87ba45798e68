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
# PORTAINER AUTHENTICATION - TOKEN EXCHANGE
# -----------------------------------------------------------------------------
# Responsibility: Trade a username/password for a JWT via POST /api/auth.
#
# The token is what every other call carries as its bearer credential.
# The password is only ever sent in this one request and never stored.
# -----------------------------------------------------------------------------

from http import HTTPStatus

import requests

from remdoc.core.classifier import CREDENTIALS_REJECTED, check_authenticated, decode
from remdoc.core.errors import InputValidationError, ProtocolError, operation
from remdoc.core.payloads import build_auth_request
from remdoc.domain.models import AuthResponse
from remdoc.infra.http_client import DEFAULT_TIMEOUT_SECONDS, PortainerTransport

AUTH_PATH = "/api/auth"


def obtain_token(
    base_url: str,
    username: str,
    password: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    session: requests.Session | None = None,
    verbose: bool = False,
) -> str:
    """
    Authenticate against Portainer and return a JWT.

    Args:
        base_url: Portainer root URL.
        username: Portainer user.
        password: That user's password.
        timeout: Seconds to wait for the answer.
        session: Optional requests session to send through.
        verbose: Trace the request on stderr.

    Returns:
        The JWT string.

    Raises:
        InputValidationError: If URL, username or password is blank.
        AuthError: On 401/422 (wrong username or password).
        ProtocolError: On any other failure status or a reply without a token.
        BackendConnectionError: If Portainer is unreachable.
    """
    with operation("authentication failed"):
        if not base_url.strip():
            raise InputValidationError("URL cannot be empty")
        if not username:
            raise InputValidationError("username cannot be empty")
        if not password:
            raise InputValidationError("password cannot be empty")

        transport = PortainerTransport(base_url, timeout=timeout, session=session, verbose=verbose)
        try:
            response = transport.request(
                "POST",
                AUTH_PATH,
                payload=build_auth_request(username, password).to_payload(),
                authenticated=False,
            )
        finally:
            if session is None:
                transport.close()
        check_authenticated(
            response,
            HTTPStatus.OK,
            rejected=CREDENTIALS_REJECTED,
            message="invalid username or password",
        )

        result = decode(response, AuthResponse)
        if not result.jwt:
            raise ProtocolError("no JWT returned from Portainer", status_code=response.status_code)

        return result.jwt
