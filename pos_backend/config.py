from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


@dataclass(frozen=True)
class AppConfig:
    session_secret: str = os.getenv("SESSION_SECRET", "pos-secret-change-in-production")
    payment_delay: float = float(os.getenv("PAYMENT_DELAY_SECONDS", "2.0"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    currency_symbol: str = "₹"
    tip_presets: tuple[int, ...] = (10, 15, 20, 25)


DEFAULT_APP_CONFIG = AppConfig()
