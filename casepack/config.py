import logging
import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv

# Load env vars from .env file
load_dotenv()


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    log_level: str
    cors_origins: List[str]


def get_settings() -> Settings:
    origins = os.environ.get("CASEPACK_CORS_ORIGINS", "*")
    return Settings(
        host=os.environ.get("CASEPACK_HOST", "0.0.0.0"),
        port=int(os.environ.get("CASEPACK_PORT", "8000")),
        log_level=os.environ.get("CASEPACK_LOG_LEVEL", "INFO").upper(),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )


def configure_logging(settings: Settings = None):
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s %(name)s %(levelname)s %(message)s',
    )
