from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

env_path = Path(__file__).parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./files.db"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    UPLOADS_DIR: Path = Path("uploads")
    STATIC_DIR: Path = Path(__file__).parent / "static"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=env_path, extra='ignore')

settings = Settings()
