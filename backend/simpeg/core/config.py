import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Google Apps Script web app; empty means offline-only
    REMOTE_ENDPOINT_URL: str = ""
    REMOTE_TIMEOUT_SECONDS: float = 10.0

    # Empty path disables persistence (memory cache only)
    LOCAL_STORE_PATH: str = ".simpeg/local_store.json"
    LOCAL_STORE_KEY: str = "simpeg.employees.v1"

    ADMIN_LOGIN_KEY: str = "admin"
    ADMIN_DISPLAY_NAME: str = "Administrator"

    MAX_UPLOAD_BYTES: int = 2 * 1024 * 1024

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


settings = Settings()
