import threading
from collections import OrderedDict
from typing import Dict, Optional
from uuid import uuid4

from loguru import logger

from backend.notifications import NotificationService
from backend.pages import PAGES, FormPage
from shortcut_core.dispatcher import ModelDispatcher


class Session:
    """In-memory page state and notices for one browser. Nothing here is persisted."""

    def __init__(self, session_id: str, dispatcher: ModelDispatcher, notification_limit: int = 1):
        self.id = session_id
        self.dispatcher = dispatcher
        self.notifications = NotificationService(limit=notification_limit)
        self.pages: Dict[str, FormPage] = {}

    def open_page(self, slug: str) -> FormPage:
        """Mounts a fresh page. A request still running on the old one is discarded when it lands."""
        page = FormPage(PAGES[slug], self.dispatcher, self.notifications)
        self.pages[slug] = page
        return page

    def page(self, slug: str) -> FormPage:
        if slug not in self.pages:
            return self.open_page(slug)
        return self.pages[slug]


class SessionStore:
    def __init__(self, dispatcher: ModelDispatcher, max_sessions: int = 500, notification_limit: int = 1):
        self.dispatcher = dispatcher
        self.max_sessions = max(max_sessions, 1)
        self.notification_limit = notification_limit
        self._sessions: "OrderedDict[str, Session]" = OrderedDict()
        self._lock = threading.Lock()

    def get_or_create(self, session_id: Optional[str]) -> Session:
        with self._lock:
            if session_id and session_id in self._sessions:
                self._sessions.move_to_end(session_id)
                return self._sessions[session_id]

            session = Session(uuid4().hex, self.dispatcher, self.notification_limit)
            self._sessions[session.id] = session
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.debug(f"Evicted idle session {evicted[:8]}")
            return session

    def __len__(self) -> int:
        return len(self._sessions)
