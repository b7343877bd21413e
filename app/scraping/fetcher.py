"""
HTTP fetcher for product pages.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

import requests

from app.scraping.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class PageFetcher:
    """
    Retrieve raw HTML for a URL with an explicit timeout.

    Blocking; callers on the event loop should run it in a worker thread.
    Each thread gets its own ``requests.Session``, since sessions are not
    safe to share across threads.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float,
        user_agent: str,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.request_headers = {"User-Agent": user_agent, "Accept": DEFAULT_ACCEPT}
        self._session_factory = session_factory
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._sessions_lock = threading.Lock()

    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def fetch(self, url: str) -> str:
        """
        Return the response body for ``url``.

        Raises FetchError on transport failures, timeouts and non-2xx statuses.
        """

        try:
            response = self._session().get(
                url,
                headers=self.request_headers,
                timeout=self.timeout_seconds,
                allow_redirects=True,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            raise FetchError(url, str(exc), status_code=status_code) from exc
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc

        logger.debug("Fetched url=%s status=%s bytes=%d", url, response.status_code, len(response.content))
        return response.text

    def close(self) -> None:
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
