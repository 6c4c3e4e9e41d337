import os
import re
import secrets
import time
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from alembic import command
from alembic.config import Config

from eventhub.config import settings

OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def generate_id() -> str:
    """24 hex chars: 4-byte creation timestamp followed by 8 random bytes."""
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


def is_object_id(value: str) -> bool:
    return bool(value) and bool(OBJECT_ID_RE.match(value))


def sanitize_input(text: str) -> str:
    """Removes HTML tags to prevent XSS and strips whitespace."""
    if not text:
        return ""
    clean = re.compile('<.*?>')
    return re.sub(clean, '', text).strip()


def now_local() -> datetime:
    """Current wall-clock time in the configured event timezone, without tzinfo."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).replace(tzinfo=None, microsecond=0)


def combine_date_time(day: date, hhmm: str) -> datetime:
    hours, minutes = hhmm.split(":")
    return datetime(day.year, day.month, day.day, int(hours), int(minutes))


def is_far_enough_ahead(when: datetime, now: datetime = None) -> bool:
    now = now or now_local()
    return when >= now + timedelta(minutes=settings.MIN_LEAD_MINUTES)


def run_migrations(alembic_ini_path: str = None):
    """
    Run Alembic migrations programmatically to upgrade the database
    to the latest version.

    :param alembic_ini_path: Path to alembic.ini file
    """
    if alembic_ini_path is None:
        alembic_ini_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), "alembic.ini")
    alembic_cfg = Config(alembic_ini_path)
    # keep the app's logging setup; alembic.ini would reset the root logger
    alembic_cfg.attributes["configure_logger"] = False
    command.upgrade(alembic_cfg, "head")
