"""Observability helpers (structured logging) for crdorder."""

from crdorder.observability.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
