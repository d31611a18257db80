"""Centralised settings for the lexicrawl dictionary crawler.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from the package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DEFAULT_SEED_URL = (
    "https://dictionary.cambridge.org/ru/"
    "%D1%81%D0%BB%D0%BE%D0%B2%D0%B0%D1%80%D1%8C/"
    "%D0%B0%D0%BD%D0%B3%D0%BB%D0%B8%D0%B9%D1%81%D0%BA%D0%B8%D0%B9/"
)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Workspace / storage
    # ------------------------------------------------------------------
    workspace_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("LEXICRAWL_WORKSPACE", Path.home() / ".lexicrawl_data")
        )
    )

    @property
    def db_path(self) -> Path:
        """Absolute path to the SQLite database file."""
        return self.workspace_dir / "lexicon.db"

    @property
    def schema_path(self) -> Path:
        """Absolute path to the schema SQL file bundled with the package."""
        return Path(__file__).resolve().parent / "db" / "schema.sql"

    # ------------------------------------------------------------------
    # Target site
    # ------------------------------------------------------------------
    site_url: str = field(
        default_factory=lambda: os.environ.get(
            "SITE_URL", "https://dictionary.cambridge.org"
        )
    )
    allowed_domain: str = field(
        default_factory=lambda: os.environ.get(
            "ALLOWED_DOMAIN", "dictionary.cambridge.org"
        )
    )
    seed_url: str = field(
        default_factory=lambda: os.environ.get("SEED_URL", _DEFAULT_SEED_URL)
    )

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "USER_AGENT",
            "Mozilla/5.0 (compatible; lexicrawl/1.0)",
        )
    )

    # ------------------------------------------------------------------
    # Crawl
    # ------------------------------------------------------------------
    stage_workers: int = field(
        default_factory=lambda: int(os.environ.get("STAGE_WORKERS", "4"))
    )
    skip_seen_urls: bool = field(
        default_factory=lambda: _env_flag("SKIP_SEEN_URLS")
    )

    # ------------------------------------------------------------------
    # Progress output: count | title | full (or 0 | 1 | 2)
    # ------------------------------------------------------------------
    verbosity: str = field(
        default_factory=lambda: os.environ.get("VERBOSITY", "title")
    )

    def ensure_workspace(self) -> None:
        """Create the workspace directory if it does not exist."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton; import this everywhere:
#   from lexicrawl.config import settings
settings = Settings()
