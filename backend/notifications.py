import threading
from typing import List
from uuid import uuid4

from pydantic import BaseModel, Field


class Notification(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex[:12])
    title: str
    description: str
    variant: str = "default"


class NotificationService:
    """
    Toast-style notices for one browser session.

    Pages receive the service at construction time and only talk to it through
    enqueue/dismiss. At most `limit` notices are visible; older ones are dropped.
    """

    def __init__(self, limit: int = 1):
        self.limit = max(limit, 1)
        self._items: List[Notification] = []
        self._lock = threading.Lock()

    def enqueue(self, title: str, description: str, variant: str = "default") -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        with self._lock:
            self._items.append(notification)
            del self._items[: -self.limit]
        return notification

    def dismiss(self, notification_id: str) -> bool:
        with self._lock:
            before = len(self._items)
            self._items = [n for n in self._items if n.id != notification_id]
            return len(self._items) != before

    def pending(self) -> List[Notification]:
        with self._lock:
            return list(self._items)
