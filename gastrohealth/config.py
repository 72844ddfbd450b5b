# -*- coding: utf-8 -*-
"""Centralized configuration for the GastroHealth backend."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Settings read from environment variables at import time."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        data_root_default = base_dir.parent / "data"

        self.data_root: Path = Path(
            os.environ.get("GASTRO_DATA_ROOT") or data_root_default
        ).expanduser()
        self.db_path: Path = Path(
            os.environ.get("GASTRO_DB_PATH") or (self.data_root / "db.json")
        ).expanduser()
        self.max_body_mb: int = int(os.environ.get("GASTRO_MAX_BODY_MB") or "10")
        self.log_level: str = (os.environ.get("GASTRO_LOG_LEVEL") or "INFO").upper()

        self.host: str = os.environ.get("GASTRO_HOST") or os.environ.get("HOST") or "127.0.0.1"
        port_raw = os.environ.get("GASTRO_PORT") or os.environ.get("PORT") or "5001"
        try:
            self.port: int = int(port_raw)
        except ValueError:
            self.port = 5001

        # ---- Gemini ----
        self.gemini_api_key: str | None = os.environ.get("GEMINI_API_KEY") or None
        self.gemini_model: str = os.environ.get("GEMINI_MODEL") or "gemini-2.5-flash"
        self.gemini_base_url: str = (
            os.environ.get("GEMINI_BASE_URL")
            or "https://generativelanguage.googleapis.com/v1beta"
        )
        self.gemini_timeout: float = float(os.environ.get("GEMINI_TIMEOUT") or "60")

        cors = os.environ.get("GASTRO_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
