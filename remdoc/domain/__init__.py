# -----------------------------------------------------------------------------
# DOMAIN LAYER
# -----------------------------------------------------------------------------
# Canonical container model (what callers see) and the explicit Portainer
# request/response records (what goes over the wire).
# -----------------------------------------------------------------------------

from .models import Container, DeployOptions, PortMapping

__all__ = ["Container", "DeployOptions", "PortMapping"]
