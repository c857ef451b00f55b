"""
Explicit per-request dependencies for the record services.

Controllers build one ``ActionContext`` per submission and hand it to the
service constructors, so services never reach for ``flask.g``, the request
object or the global session factory.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable

from fincontrol.core.config import APP_TZ
from fincontrol.core.revalidation import revalidate_path


def today_in_app_tz() -> date:
    """Calendar date "now" in the configured application timezone."""
    return datetime.now(APP_TZ).date()


@dataclass
class ActionContext:
    """Session, invalidation callback and clock for one action."""

    db: Any
    revalidate: Callable[[str], None] = field(default=revalidate_path)
    today: Callable[[], date] = field(default=today_in_app_tz)
