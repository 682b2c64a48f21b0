"""
Family Wishlist Configuration Settings
"""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Paths (use WISHLIST_ prefix)
    data_path: Path = Field(
        default=Path("./data.json"),
        alias="WISHLIST_DATA_PATH",
        description="JSON document holding people and items"
    )
    public_dir: Path = Field(
        default=Path("./public"),
        alias="WISHLIST_PUBLIC_DIR",
        description="Pre-built front-end assets, served at / when present"
    )

    # Server
    port: int = Field(default=3000, alias="WISHLIST_PORT")
    host: str = Field(default="0.0.0.0", alias="WISHLIST_HOST")
    log_level: str = Field(default="INFO", alias="WISHLIST_LOG_LEVEL")

    cors_origins_raw: str = Field(
        default="*",
        alias="WISHLIST_CORS_ORIGINS",
        description="Allowed CORS origins (comma-separated)"
    )

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated origins into list."""
        if not self.cors_origins_raw:
            return []
        return [x.strip() for x in self.cors_origins_raw.split(",") if x.strip()]


settings = Settings()
