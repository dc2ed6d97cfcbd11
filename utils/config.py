"""Runtime configuration loaded from the environment."""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_USER_AGENT = "SiteSecure360-Audit-Tool/1.0"


def load_env_file() -> bool:
    """Load environment variables from .env file."""
    env_paths = [
        PROJECT_ROOT / ".env",
        Path.cwd() / ".env",
    ]
    for env_path in env_paths:
        if env_path.exists():
            with open(env_path, "r") as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, value = line.split("=", 1)
                        os.environ.setdefault(key.strip(), value.strip())
            logger.debug("Loaded environment from: %s", env_path)
            return True
    return False


def _env_number(key: str, default: float) -> float:
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid value for %s: %r, using %s", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Non-positive value for %s: %r, using %s", key, raw, default)
        return default
    return value


def _env_flag(key: str, default: bool) -> bool:
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


@dataclass
class AuditSettings:
    """
    Settings shared by the fetcher, browser provider and Lighthouse runner.

    Every field can be overridden through an environment variable, see
    `from_env()`.
    """
    user_agent: str = DEFAULT_USER_AGENT
    fetch_timeout: float = 15.0
    engine_timeout: float = 120.0
    lighthouse_path: str = "lighthouse"
    chrome_flags: List[str] = field(default_factory=lambda: ["--no-sandbox"])
    headless: bool = True
    port: int = 3000

    @classmethod
    def from_env(cls) -> "AuditSettings":
        """Build settings from AUDIT_* / LIGHTHOUSE_PATH environment variables."""
        flags_raw = os.environ.get("AUDIT_CHROME_FLAGS")
        if flags_raw is None:
            chrome_flags = ["--no-sandbox"]
        else:
            chrome_flags = [f.strip() for f in flags_raw.split(",") if f.strip()]

        return cls(
            user_agent=os.environ.get("AUDIT_USER_AGENT") or DEFAULT_USER_AGENT,
            fetch_timeout=_env_number("AUDIT_FETCH_TIMEOUT", 15.0),
            engine_timeout=_env_number("AUDIT_ENGINE_TIMEOUT", 120.0),
            lighthouse_path=os.environ.get("LIGHTHOUSE_PATH") or "lighthouse",
            chrome_flags=chrome_flags,
            headless=_env_flag("AUDIT_HEADLESS", True),
            port=int(_env_number("AUDIT_PORT", 3000)),
        )
