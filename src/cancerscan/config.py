"""Configuration management for the CancerScan service."""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_ARTIFACT_URL = "https://storage.googleapis.com/storage-model-abi/model/model.pt"


class Settings(BaseSettings):
    environment: str = Field("development", alias="CANCERSCAN_ENV")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8080, alias="PORT")
    cors_origins_raw: str = Field("*", alias="CORS_ORIGINS")

    artifact_url: str = Field(DEFAULT_ARTIFACT_URL, alias="CANCERSCAN_MODEL_URL")
    load_attempts: int = Field(3, alias="CANCERSCAN_MODEL_LOAD_ATTEMPTS")
    load_delay: float = Field(5.0, alias="CANCERSCAN_MODEL_LOAD_DELAY")
    download_timeout: float = Field(60.0, alias="CANCERSCAN_MODEL_TIMEOUT")
    load_on_startup: bool = Field(True, alias="CANCERSCAN_LOAD_MODEL")

    decision_threshold: float = 0.7
    max_upload_bytes: int = 1_000_000

    credentials_path: str = Field(
        "serviceAccountKey.json", alias="GOOGLE_APPLICATION_CREDENTIALS"
    )
    firestore_project: Optional[str] = Field(None, alias="FIRESTORE_PROJECT")
    predictions_collection: str = "predictions"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        populate_by_name = True
        extra = "ignore"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins_raw.split(",") if origin]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]


settings = get_settings()
