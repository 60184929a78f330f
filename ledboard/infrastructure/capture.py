from __future__ import annotations

import logging
import time
from typing import Callable, Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import requests

from ..config import SETTINGS, BoardSettings
from ..errors import CaptureError

log = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]


def _merge_query_params(url: str, overrides: Mapping[str, str | None] | None) -> str:
    """Merge override query parameters into ``url``.

    Parameters with a value of ``None`` are removed from the query string. Values
    are treated as opaque strings; callers are responsible for providing any
    necessary encoding.
    """

    if not overrides:
        return url

    parts = urlsplit(url)
    query = dict(parse_qsl(parts.query, keep_blank_values=True))

    for key, value in overrides.items():
        if value is None:
            query.pop(key, None)
        else:
            query[key] = value

    return urlunsplit(parts._replace(query=urlencode(query, doseq=True)))


class CaptureClient:
    """Client for the external screenshot service.

    The service is asked for an encoded raster of ``url`` (optionally limited to
    the element matching ``selector``) and replies with the image bytes.
    """

    def __init__(
        self,
        settings: BoardSettings = SETTINGS,
        session_factory: SessionFactory | None = None,
    ) -> None:
        self._settings = settings
        self._session_factory = session_factory or requests.Session
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = self._session_factory()
        session.headers.update({"User-Agent": "ledboard/1.0"})
        return session

    def capture_request_url(self, url: str, selector: str | None = None) -> str:
        return _merge_query_params(
            self._settings.capture_url,
            {
                "url": url,
                "selector": selector or None,
                "width": str(self._settings.viewport_width),
                "height": str(self._settings.viewport_height),
            },
        )

    def capture(self, url: str, *, selector: str | None = None) -> bytes:
        if not self._settings.capture_url:
            raise CaptureError("Capture service is not configured")
        if not url:
            raise CaptureError("A target URL is required")

        target_url = self.capture_request_url(url, selector)
        last_exception: Exception | None = None
        for attempt in range(1, self._settings.capture_retries + 2):
            try:
                response = self._session.get(target_url, timeout=self._settings.capture_timeout)
                response.raise_for_status()
                if not response.content:
                    raise CaptureError("Capture service returned no data", {"url": url})
                return response.content
            except requests.RequestException as exc:
                last_exception = exc
                log.warning("Capture of %s failed (attempt %d): %s", url, attempt, exc)
                if attempt <= self._settings.capture_retries:
                    time.sleep(0.4 * attempt)
        raise CaptureError(
            "Capture failed",
            {"url": url, "selector": selector, "reason": str(last_exception)},
        )
