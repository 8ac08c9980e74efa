"""
Portal Service Libraries Package.

Shared infrastructure used by the maintenance portal client services.
"""

from .logging_utils import configure_service_logging, create_service_logger

__all__ = ["configure_service_logging", "create_service_logger"]
