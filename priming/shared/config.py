# priming/shared/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from enum import Enum

class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"

class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic.
    """

    # --- Application Meta ---
    APP_NAME: str = "speech-priming"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    OTEL_SERVICE_NAME: str = "speech-priming"

    # --- Turn Handling ---
    # Base locale used when the dialog engine does not supply one for the turn.
    DEFAULT_LOCALE: str = "en-us"
    # Key of the context stack inside the engine's per-turn transient state.
    TURN_STATE_KEY: str = "turn.primingContext"

    # --- Declarative Resources ---
    DIALOGS_PATH: str = "dialogs"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
