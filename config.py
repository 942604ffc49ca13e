from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Lingua Practice API"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Frontends allowed to call the API from the browser
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
    ]

    # The word diff builds an (m+1) x (n+1) table, so keep dictation inputs
    # to sentence-sized chunks
    MAX_COMPARE_WORDS: int = 500
    MAX_BATCH_ITEMS: int = 200

    class Config:
        env_file = ".env"


settings = Settings()
