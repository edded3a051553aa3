# roadmap_studio/config.py

from typing import List
from pathlib import Path
import logging
import sys

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from pythonjsonlogger.json import JsonFormatter

load_dotenv()

# Custom JSON formatter that excludes null/None fields
class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter that only includes fields with non-None values."""

    def add_fields(self, log_record, record, message_dict):
        """Override to filter out None values before adding to JSON output."""
        super().add_fields(log_record, record, message_dict)

        # Remove keys with None values
        log_record_copy = dict(log_record)
        for key, value in log_record_copy.items():
            if value is None:
                del log_record[key]

def setup_json_logging(log_level: int = logging.INFO, stream=None) -> None:
    """Initialize JSON logging configuration for the application."""
    handler = logging.StreamHandler(stream or sys.stdout)

    # JSON formatter with common fields used across the application
    formatter = CustomJsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s "
        "%(roadmap_id)s %(item_id)s %(category)s %(count)s "
        "%(version)s %(key)s %(reason)s %(bytes)s"
    )

    handler.setFormatter(formatter)

    # Root logger for the package
    root_logger = logging.getLogger("roadmap_studio")
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers = []

    root_logger.addHandler(handler)

    # Prevent propagation to avoid duplicate logs
    root_logger.propagate = False


BASE_DIR = Path(__file__).resolve().parent.parent  # project root folder


class Settings(BaseSettings):
    # App
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Persistence (key-value blob store)
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'roadmaps.db'}"
    STORAGE_KEY: str = "roadmaps"
    PERSIST_ASYNC: bool = True  # False -> writes happen inline (tests, scripts)

    # Timeline window
    DEFAULT_WINDOW_MONTHS: int = 3  # empty roadmap -> now .. now + N months

    # Item geometry (px)
    TIMELINE_ROW_HEIGHT_PX: int = 60
    TIMELINE_ROW_GAP_PX: int = 16

    # Swimlane sizing (px)
    LANE_ROW_PX: int = 40
    LANE_MIN_HEIGHT_PX: int = 80

    # Category palette, assigned by category index
    CATEGORY_COLORS: List[str] = [
        "bg-blue-500",
        "bg-teal-500",
        "bg-indigo-500",
        "bg-purple-500",
        "bg-rose-500",
        "bg-amber-500",
        "bg-emerald-500",
        "bg-sky-500",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )

    @field_validator("CATEGORY_COLORS")
    @classmethod
    def validate_palette(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("CATEGORY_COLORS must contain at least one color")
        return v

    @field_validator("DEFAULT_WINDOW_MONTHS")
    @classmethod
    def validate_window_months(cls, v: int) -> int:
        if v < 0:
            raise ValueError("DEFAULT_WINDOW_MONTHS must be >= 0")
        return v


settings = Settings()
