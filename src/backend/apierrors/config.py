"""AppSettings -- api-errors application configuration.

All environment variables are read via pydantic-settings. Every setting has
a default, so the application starts with an empty environment.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """api-errors application settings, loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "api-errors"

    # Root log level applied by configure_logging()
    LOG_LEVEL: str = "INFO"

    # Level used when an ErrorResponse was built with a log message
    ERROR_LOG_LEVEL: str = "WARNING"

    # Request validation failures: True -> 200 invalid request, False -> 400
    VALIDATION_AS_INVALID_REQUEST: bool = True

    REQUEST_ID_HEADER: str = "X-Request-ID"


settings = AppSettings()
