"""
Utility modules for the vCenter session client.

This package contains the logging and configuration helpers shared by the
client code.
"""

from vccli.utils.logging import (
    configure_logging,
    get_logger,
    log_with_context,
    mask_token,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_with_context",
    "mask_token",
]
