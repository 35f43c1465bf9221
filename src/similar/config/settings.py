from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default config paths relative to the package config directory
_CONFIG_DIR = Path(__file__).parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SIMILAR_")

    log_json: bool = False
    log_level: str = "WARNING"
    config_path: Path = _CONFIG_DIR / "similarity.yaml"
    index_dir_name: str = ".tmp-similar-db"


@lru_cache
def get_settings() -> Settings:
    return Settings()
