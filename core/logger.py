import logging
import re
import sys
from typing import Optional

from core.config import Settings

_API_KEY_RE = re.compile(r"(api_key=)[^&\s'\"]+")

def redact(text: str) -> str:
    return _API_KEY_RE.sub(r"\1***", text)

class ApiKeyRedactionFilter(logging.Filter):
    """Masque la valeur de api_key dans les URLs loguées (httpx logue la requête complète)."""
    def filter(self, record):
        try:
            msg = record.getMessage()
        except Exception:
            return True
        if "api_key=" in msg:
            record.msg = redact(msg)
            record.args = None
        return True

def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging; level defaults to EXCH_LOG_LEVEL (Settings.LOG_LEVEL)."""
    if level is None:
        level = Settings().LOG_LEVEL
    numeric = getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ApiKeyRedactionFilter())
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[handler],
    )
    logging.getLogger().setLevel(numeric)
    # Réduire le bruit des logs HTTP
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
