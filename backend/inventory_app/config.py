"""
Inventory Service — Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe loading with validation before the server starts.
How:   Values come from the command line (see cli.py), falling back to
       INVENTORY_* environment variables or a .env file.
Who:   Built once by the CLI launcher and handed to create_app().
When:  At process start; immutable afterwards.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# HTML forms shipped with the package
DEFAULT_FORMS_DIR = Path(__file__).resolve().parent / "static"


class Settings(BaseSettings):
    """
    Application settings.

    host/port/cache_dir are mandatory on the command line; the defaults here
    only exist so tests and `uvicorn --factory` can build an app quickly.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=3000, ge=1, le=65535, description="Bind port")

    # ── Photo Cache ───────────────────────────────────────────────────────
    # What: Directory where uploaded photos are written
    # Created (with parents) at startup; files outlive the process
    cache_dir: str = Field(default="./cache", description="Photo cache directory")

    # What: Upper bound on a single uploaded photo, in bytes
    # Default: 10MB = 10 * 1024 * 1024
    max_photo_size: int = Field(default=10_485_760, ge=1)

    # ── Static Forms ──────────────────────────────────────────────────────
    # Directory holding RegisterForm.html and SearchForm.html
    forms_dir: Optional[str] = Field(default=None)

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = {
        "env_prefix": "INVENTORY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def cache_path(self) -> Path:
        """Absolute path of the photo cache directory."""
        return Path(self.cache_dir).resolve()

    @property
    def forms_path(self) -> Path:
        """Directory the static HTML forms are served from."""
        if self.forms_dir:
            return Path(self.forms_dir).resolve()
        return DEFAULT_FORMS_DIR
