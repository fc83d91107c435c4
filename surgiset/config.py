from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

StorageBackendName = Literal["auto", "file", "memory"]


class Settings(BaseSettings):
    """Application settings loaded from environment (``SURGISET_*``)."""

    model_config = SettingsConfigDict(env_prefix="SURGISET_", env_file=".env")

    app_name: str = "SurgiSet Portfolio"

    data_dir: Path = Path.home() / ".surgiset"

    # "auto" uses the file backend when data_dir is writable, memory otherwise
    storage_backend: StorageBackendName = "auto"

    inventory_namespace: str = "instrument-storage"
    theme_namespace: str = "theme-storage"
    recent_searches_namespace: str = "recent_searches"

    recent_searches_limit: int = Field(default=5, ge=1)
    search_limit: int = Field(default=50, ge=1)

    image_size: int = Field(default=512, ge=16)
    image_quality: int = Field(default=80, ge=1, le=95)

    @property
    def image_dir(self) -> Path:
        return self.data_dir / "images"

    @property
    def export_dir(self) -> Path:
        return self.data_dir / "exports"


settings = Settings()
