"""Engine Settings - Central Configuration"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from FLOWGATE_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="FLOWGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    log_to_file: bool = False
    logs_path: str = "./logs"

    # Definitions
    strict_definitions: bool = False  # Run the integrity check when an engine is built
    warn_dangling_references: bool = True

    @property
    def log_file(self) -> str:
        """Path of the main log file"""
        return f"{self.logs_path.rstrip('/')}/flowgate.log"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
