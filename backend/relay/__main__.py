import logging
import sys
from typing import Optional

import uvicorn

from .exceptions import StartupValidationError
from .logging import setup_logging
from .main import create_app
from .settings import Settings, app_settings
from .startup import validate_settings

logger = logging.getLogger(__name__)


def run(settings: Optional[Settings] = None) -> None:
    settings = settings or app_settings
    setup_logging(settings.log_level)

    try:
        validate_settings(settings)
    except StartupValidationError as e:
        logger.critical("Refusing to start: %s", e)
        sys.exit(1)

    options = {}
    if settings.is_secured:
        options = {
            "ssl_certfile": settings.cert_file_path,
            "ssl_keyfile": settings.key_file_path,
        }
    logger.info(
        "Starting %s server on :%s", settings.server_mode.upper(), settings.port
    )
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
        **options,
    )


def main() -> None:
    run()


if __name__ == "__main__":
    main()
