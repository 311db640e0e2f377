"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.ontology import Locale


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    database_url: str = "sqlite:///./kinfolk.db"

    # Application
    app_name: str = "Kinfolk"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Kinship
    default_locale: Locale = Locale.RU

    # Path finding
    path_max_depth: int = 15
    lineage_max_depth: int = 5


settings = Settings()
