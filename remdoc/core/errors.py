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
# BACKEND ERRORS
# -----------------------------------------------------------------------------
# The failure taxonomy every backend operation raises from:
# - BackendConnectionError: no response at all (DNS, refused, timeout)
# - AuthError: the control plane rejected our credentials
# - ProtocolError: any other unexpected status, body kept verbatim
# - InputValidationError: bad local input, caught before any network call
#
# Errors are re-raised with the operation name prefixed, keeping their type
# and fields, so callers can both print them and branch on them.
# -----------------------------------------------------------------------------

import copy
from contextlib import contextmanager


class BackendError(Exception):
    """Base for every error raised by a container backend."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def wrap(self, context: str) -> "BackendError":
        """
        Return a copy of this error with `context` prefixed to its message.

        Args:
            context: What was being attempted (e.g. 'failed to get endpoint').

        Returns:
            An error of the same type and fields, new message.
        """
        wrapped = copy.copy(self)
        wrapped.message = f"{context}: {self.message}"
        wrapped.args = (wrapped.message,)
        return wrapped

    def __str__(self) -> str:
        return self.message


class BackendConnectionError(BackendError):
    """Raised when the control plane cannot be reached."""

    pass


class AuthError(BackendError):
    """Raised when the control plane rejects the token or the credentials."""

    pass


class ProtocolError(BackendError):
    """
    Raised on an unexpected status code or an undecodable response.

    Carries the status code and the response body exactly as received.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class InputValidationError(BackendError):
    """Raised for locally detected bad input, before any request is sent."""

    pass


class NoEndpointsError(BackendError):
    """Raised when the control plane has no Docker environment registered."""

    pass


@contextmanager
def operation(description: str):
    """Prefix any BackendError raised inside the block with `description`."""
    try:
        yield
    except BackendError as e:
        raise e.wrap(description) from e
