# -----------------------------------------------------------------------------
# INFRASTRUCTURE LAYER
# -----------------------------------------------------------------------------
# Low-level wrappers the core builds on:
# - PortainerTransport: Authenticated requests session to the control plane
# - Deadline: One time budget shared by the requests of an operation
# - config: Local persistence of the Portainer URL and JWT
# -----------------------------------------------------------------------------

from .http_client import Deadline, PortainerTransport

__all__ = ["Deadline", "PortainerTransport"]
