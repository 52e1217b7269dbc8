from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # API Settings
    PROJECT_NAME: str = "CashSplit API"
    API_V1_STR: str = "/api/v1"
    PROJECT_VERSION: str = "0.1.0"
    DESCRIPTION: str = "Receipt normalization and bill splitting API"

    # MongoDB
    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "cashsplit"

    # OCR upload service
    OCR_UPLOAD_URL: str = "https://brytech.pythonanywhere.com/upload"
    OCR_UPLOAD_TIMEOUT: int = 120
    OCR_UPLOAD_FIELD: str = "file"

    # File Upload
    MAX_FILE_SIZE: int = 10485760

    # Split sessions kept in memory; the oldest is dropped past this
    MAX_OPEN_SESSIONS: int = 20

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env"
    )

settings = Settings()
