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
# RESPONSE CLASSIFIER
# -----------------------------------------------------------------------------
# Responsibility: Turn an HTTP response into "fine" or a typed error.
#
# - Expected status -> return, caller decodes the body
# - Auth status     -> AuthError with a readable message
# - Anything else   -> ProtocolError carrying status + body verbatim
# -----------------------------------------------------------------------------

from http import HTTPStatus

import requests
from pydantic import TypeAdapter

from remdoc.core.errors import AuthError, ProtocolError

# Statuses that mean "your token is no good" on an authenticated call
TOKEN_REJECTED = (HTTPStatus.UNAUTHORIZED,)

# Portainer answers a bad username/password with 422 on older releases, 401 on newer
CREDENTIALS_REJECTED = (HTTPStatus.UNAUTHORIZED, HTTPStatus.UNPROCESSABLE_ENTITY)


def read_body(response: requests.Response) -> str:
    """Best-effort body text. A failed read yields an empty string."""
    try:
        return response.text
    except (requests.RequestException, UnicodeDecodeError):
        return ""


def check_response(response: requests.Response, *expected_codes: int) -> None:
    """
    Accept the response if its status is one of `expected_codes`.

    Raises:
        ProtocolError: For any other status, with the body attached.
    """
    if response.status_code in expected_codes:
        return

    body = read_body(response)
    raise ProtocolError(
        f"Portainer API error (status {response.status_code}): {body}",
        status_code=response.status_code,
        body=body,
    )


def check_authenticated(
    response: requests.Response,
    *expected_codes: int,
    rejected: tuple = TOKEN_REJECTED,
    message: str = "invalid JWT token (unauthorized)",
) -> None:
    """
    Same as check_response, but a rejected-credentials status becomes AuthError.

    Raises:
        AuthError: If the status is in `rejected`.
        ProtocolError: For any other unexpected status.
    """
    if response.status_code in rejected and response.status_code not in expected_codes:
        raise AuthError(message)
    check_response(response, *expected_codes)


def decode(response: requests.Response, record_type):
    """
    Decode a successful response body into `record_type`.

    Args:
        response: A response that already passed classification.
        record_type: A record class or a typing form such as list[RawContainer].

    Raises:
        ProtocolError: If the body is not JSON or does not fit the record.
    """
    try:
        return TypeAdapter(record_type).validate_python(response.json())
    except ValueError as e:
        # Covers both JSONDecodeError and pydantic's ValidationError
        raise ProtocolError(
            f"failed to parse response: {e}",
            status_code=response.status_code,
            body=read_body(response),
        ) from e
