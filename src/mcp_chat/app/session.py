import asyncio
import logging
from typing import AsyncIterator, Callable, Optional, Set

from ..models import Session


class SessionStore:
    """
    Owns the canonical Session value and publishes every change.

    Subscribers get the latest value on subscription and then each update.
    A subscriber that falls behind only sees the most recent value.
    """

    def __init__(
        self,
        session: Optional[Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger("SessionStore")
        self._session = session or Session()
        self._subscribers: Set[asyncio.Queue] = set()
        self.logger.info(f"Created new session: {self._session.session_id}")

    def current(self) -> Session:
        return self._session

    def update(self, transform: Callable[[Session], Session]) -> Session:
        """Apply a pure transform to the session and publish the result."""
        updated = transform(self._session)
        if updated.session_id != self._session.session_id:
            raise ValueError("Session identifier cannot change")
        self._session = updated
        for queue in self._subscribers:
            self._offer(queue, updated)
        return updated

    @staticmethod
    def _offer(queue: asyncio.Queue, session: Session) -> None:
        if queue.full():
            queue.get_nowait()
        queue.put_nowait(session)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def stream(self) -> AsyncIterator[Session]:
        """Yield the latest session, then every subsequent update, forever."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=1)
        queue.put_nowait(self._session)
        self._subscribers.add(queue)
        self.logger.debug(f"Subscriber added ({self.subscriber_count} active)")
        try:
            while True:
                yield await queue.get()
        finally:
            self._subscribers.discard(queue)
            self.logger.debug(f"Subscriber removed ({self.subscriber_count} active)")
