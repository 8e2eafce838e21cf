from pydantic_settings import SettingsConfigDict

from .client_config import ClientConfig, RelayConfig
from .logging_config import LoggingConfig


class NetworkingConfig(ClientConfig, RelayConfig, LoggingConfig):
    model_config = SettingsConfigDict(
        env_prefix="NETWORKING_",
        # read from dotenv format config file
        env_file=".env",
        env_file_encoding="utf-8",
        # ignore extra attributes
        extra="ignore",
    )


networking_config: NetworkingConfig = NetworkingConfig()

__all__ = ["ClientConfig", "LoggingConfig", "NetworkingConfig", "RelayConfig", "networking_config"]
