import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class BoardSettings:
    port: int
    led_size: int
    output_format: str
    screenshots_dir: Path
    processed_dir: Path
    capture_url: str
    capture_timeout: float
    capture_retries: int
    viewport_width: int
    viewport_height: int
    font_path: Optional[str]
    font_size: int
    log_level: str

    @classmethod
    def from_env(cls) -> "BoardSettings":
        return cls(
            port=int(os.getenv("PORT", "3000")),
            led_size=int(os.getenv("LED_SIZE", "10")),
            output_format=os.getenv("OUTPUT_FORMAT", "png").lower(),
            screenshots_dir=Path(os.getenv("SCREENSHOTS_DIR", "./screenshots")),
            processed_dir=Path(os.getenv("PROCESSED_DIR", "./processed")),
            capture_url=os.getenv("CAPTURE_URL", ""),
            capture_timeout=float(os.getenv("CAPTURE_TIMEOUT", "30.0")),
            capture_retries=int(os.getenv("CAPTURE_RETRIES", "1")),
            viewport_width=int(os.getenv("VIEWPORT_WIDTH", "1280")),
            viewport_height=int(os.getenv("VIEWPORT_HEIGHT", "720")),
            font_path=os.getenv("FONT_PATH") or None,
            font_size=int(os.getenv("FONT_SIZE", "32")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


SETTINGS = BoardSettings.from_env()


def configure_logging(settings: BoardSettings = SETTINGS) -> logging.Logger:
    logging.basicConfig(level=settings.log_level)
    return logging.getLogger("ledboard")
