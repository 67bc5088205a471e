# salesboard/core/config.py

import os
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel
from sqlalchemy.engine import URL, make_url

load_dotenv()


class DatabaseSettings(BaseModel):
    host: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    database: Optional[str] = None
    port: Optional[int] = None
    driver: str = "mysql+pymysql"
    # full URL wins over the parts above (sqlite for local runs and tests)
    url: Optional[str] = None
    pool_timeout: float = 30

    def sqlalchemy_url(self):
        if self.url:
            return make_url(self.url)
        return URL.create(
            drivername=self.driver,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )


class Settings(BaseModel):
    db: DatabaseSettings
    upload_dir: Path = Path("uploads")
    upload_timeout_seconds: float = 30
    redis_url: Optional[str] = None
    cache_ttl_seconds: int = 300
    cors_allowed_origins: List[str] = ["*"]
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build settings from the environment (and a .env file, if present)."""
    timeout = float(os.getenv("UPLOAD_TIMEOUT_SECONDS", "30"))
    port = os.getenv("DB_PORT")

    db = DatabaseSettings(
        host=os.getenv("DB_HOST"),
        user=os.getenv("DB_USER"),
        password=os.getenv("DB_PASSWORD"),
        database=os.getenv("DB_NAME"),
        port=int(port) if port else None,
        driver=os.getenv("DB_DRIVER", "mysql+pymysql"),
        url=os.getenv("DATABASE_URL"),
        pool_timeout=timeout,
    )

    return Settings(
        db=db,
        upload_dir=Path(os.getenv("UPLOAD_DIR", "uploads")),
        upload_timeout_seconds=timeout,
        redis_url=os.getenv("REDIS_URL") or None,
        cache_ttl_seconds=int(os.getenv("CACHE_TTL_SECONDS", "300")),
        cors_allowed_origins=os.getenv("CORS_ALLOWED_ORIGINS", "*").split(","),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
