"""
tracker/services/notification.py

User-facing notices for the tracking session.
Each notice is kept on the session (most recent NOTICE_HISTORY_MAX_LEN)
and written to the log. In a real app these would be push notifications.
"""

import structlog

from tracker.context import SessionContext
from tracker.schemas import Notice, NoticeLevel

logger = structlog.get_logger(__name__)


def notify(
    ctx: SessionContext,
    message: str,
    level: NoticeLevel = NoticeLevel.SUCCESS,
) -> Notice:
    """Record a notice on the session and log it."""
    notice = Notice(level=level, message=message, created_at=ctx.wall_clock())
    ctx.notices.append(notice)
    log = logger.warning if level is NoticeLevel.ERROR else logger.info
    log("notice_emitted", level=level.value, message=message)
    return notice
