"""
Fail-fast checks run before the server starts listening.
"""

import logging

from .exceptions import StartupValidationError
from .settings import Settings

logger = logging.getLogger(__name__)


def _check_readable(path: str, what: str) -> None:
    if not path:
        raise StartupValidationError(f"{what} path is required in https mode")
    try:
        with open(path, "rb") as f:
            f.read()
    except OSError as e:
        raise StartupValidationError(f"Error reading {what} file: {e}") from e


def validate_settings(settings: Settings) -> None:
    """
    Validate process configuration.

    In https mode both the certificate and the key file must be readable.

    Raises:
        StartupValidationError: If the configuration cannot be served.
    """
    if settings.is_secured:
        _check_readable(settings.cert_file_path, "cert")
        _check_readable(settings.key_file_path, "key")
    logger.info("Configuration validated (%s mode)", settings.server_mode)
