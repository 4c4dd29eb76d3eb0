# backend/relay/settings.py
import os
from typing import List, Literal, Tuple, Type

from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

CONFIG_FILE = os.environ.get("RELAY_CONFIG_FILE", "config.json")


class Settings(BaseSettings):
    """
    Process configuration, read once at startup.

    Values come from constructor kwargs, then environment variables
    (``SERVER_MODE``, ``PORT``, ...), then ``config.json``.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False, json_file=CONFIG_FILE, frozen=True
    )

    server_mode: Literal["http", "https"] = "http"
    cert_file_path: str = ""
    key_file_path: str = ""
    host: str = "0.0.0.0"
    port: int = 8080

    log_level: str = "INFO"

    # Upper bound for a single write to a peer socket, in seconds
    send_timeout: float = 5.0
    # Whether a room broadcast is also delivered back to its sender
    echo_to_sender: bool = True

    cors_origins: List[str] = ["*"]

    @property
    def is_secured(self) -> bool:
        return self.server_mode == "https"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            JsonConfigSettingsSource(settings_cls),
        )


app_settings = Settings()
