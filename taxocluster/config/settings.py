"""
Central configuration for the taxonomy clustering pipeline.

All tunables live here. Environment variables override defaults via .env.
"""

import os
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

# ── Paths ──────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = Path(os.getenv("TAXOCLUSTER_DATA_DIR", PROJECT_ROOT / "data"))
LOG_DIR = DATA_DIR / "logs"

CYCLE_POLICIES = ("document", "token")


@dataclass(frozen=True)
class Settings:
    """Immutable pipeline settings. Override via environment variables."""

    # ── Paths ──────────────────────────────────────────────────────────────
    project_root: Path = PROJECT_ROOT
    data_dir: Path = DATA_DIR
    log_dir: Path = LOG_DIR

    # ── Workers ────────────────────────────────────────────────────────────
    max_workers: int = int(os.getenv("TAXOCLUSTER_MAX_WORKERS", "4"))
    store_shards: int = int(os.getenv("TAXOCLUSTER_STORE_SHARDS", "16"))

    # ── Classification ─────────────────────────────────────────────────────
    # "document": a cyclic alias voids the whole document
    # "token": only the cyclic token is dropped
    cycle_policy: str = os.getenv("TAXOCLUSTER_CYCLE_POLICY", "document")
    extract_details: bool = os.getenv(
        "TAXOCLUSTER_EXTRACT_DETAILS", "false"
    ).lower() in ("1", "true", "yes")

    # ── Logging ────────────────────────────────────────────────────────────
    log_level: str = os.getenv("TAXOCLUSTER_LOG_LEVEL", "INFO")

    def __post_init__(self):
        if self.cycle_policy not in CYCLE_POLICIES:
            raise ValueError(
                f"cycle_policy must be one of {CYCLE_POLICIES}, "
                f"got {self.cycle_policy!r}"
            )
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        if self.store_shards < 1:
            raise ValueError("store_shards must be >= 1")
