# -----------------------------------------------------------------------------
# CORE LAYER
# -----------------------------------------------------------------------------
# The container backend and everything it is built from:
# - Backend: The capability contract callers depend on
# - PortainerBackend: The control-plane adapter implementing it
# - Classifier / EndpointResolver / Payloads / Summarizer: Its building blocks
# - obtain_token: The login exchange that produces the bearer token
# -----------------------------------------------------------------------------

from .auth import obtain_token
from .backend import Backend
from .errors import (
    AuthError,
    BackendConnectionError,
    BackendError,
    InputValidationError,
    NoEndpointsError,
    ProtocolError,
)
from .portainer import PortainerBackend

__all__ = [
    "Backend", "PortainerBackend", "obtain_token",
    "BackendError", "BackendConnectionError", "AuthError", "ProtocolError",
    "InputValidationError", "NoEndpointsError",
]
