# -----------------------------------------------------------------------------
# REMDOC
# -----------------------------------------------------------------------------
# Deploy and manage Docker containers on a remote host through Portainer.
# -----------------------------------------------------------------------------

__version__ = "0.1.0"
