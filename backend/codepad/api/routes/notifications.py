"""Pending user notifications (e.g. failed saves)."""

from fastapi import APIRouter, Depends

from codepad.api.deps import get_notifier
from codepad.schemas.files import NoticeOut
from codepad.services.notifications import Notifier

router = APIRouter()


@router.get("", response_model=list[NoticeOut])
async def drain_notifications(notifier: Notifier = Depends(get_notifier)):
    """Return and clear pending notices — each is shown once."""
    return [
        NoticeOut(level=n.level, message=n.message, timestamp=n.timestamp.isoformat())
        for n in notifier.drain()
    ]
