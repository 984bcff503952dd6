"""Load and validate environment variables. Single source for env handling."""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root (parent of medbot/)
_root = Path(__file__).resolve().parent.parent.parent
load_dotenv(_root / ".env")

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _get(key: str, default: str = "") -> str:
    """Get config: Streamlit secrets (deployed) then env vars (local)."""
    try:
        import streamlit as st
        if hasattr(st, "secrets") and st.secrets and key in st.secrets:
            return str(st.secrets.get(key, default))
    except Exception:
        # No secrets.toml outside a deployed Streamlit app
        pass
    return os.getenv(key, default)


def load_env() -> None:
    """Ensure .env is loaded. Call at app startup."""
    load_dotenv(_root / ".env")


def get_settings() -> "Settings":
    """Return validated settings. Uses Streamlit secrets when deployed, else env / .env."""
    from medbot.config.settings import Settings

    catalog_path = ""
    raw_path = _get("MEDBOT_CATALOG_PATH", "").strip()
    if raw_path:
        p = Path(raw_path)
        if not p.is_absolute():
            p = _root / p
        if p.exists():
            catalog_path = str(p.resolve())

    page_size = _get("MEDBOT_PAGE_SIZE", "5").strip() or "5"
    return Settings(
        log_level=_get("MEDBOT_LOG_LEVEL", "INFO").upper(),
        page_size=int(page_size) if page_size.isdigit() else 5,
        bot_name=_get("MEDBOT_BOT_NAME", "Drugs.ng"),
        catalog_path=catalog_path,
    )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once; later calls only adjust the medbot level."""
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger("medbot").setLevel(level)
