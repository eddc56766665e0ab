"""
Deferred-sync queue schemas.

Actions recorded while the device may be offline wait in the sync queue
until connectivity returns.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel


class SyncItemType(str, Enum):
    LESSON_PROGRESS = "lesson_progress"
    QA_HISTORY = "qa_history"


class SyncQueueItem(BaseModel):
    type: SyncItemType
    data: dict[str, Any] = {}
    timestamp: datetime
