"""HTTP client for the SkillShare GraphQL API and the lesson mirrors."""

import httpx
from loguru import logger

from skillstream.config import Settings
from skillstream.exceptions import TransportError


class SkillshareClient:
    """Thin wrapper over :class:`httpx.Client` that returns raw response bodies.

    Every request carries the site referer and the configured timeout. Network
    failures, timeouts and non-success statuses are raised as
    :class:`~skillstream.exceptions.TransportError`; nothing is retried.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initializes the SkillshareClient.

        Args:
            settings: Endpoints and timeout. Defaults to :class:`Settings`.
            transport: Transport handed to httpx, e.g. ``httpx.MockTransport`` in tests.
        """
        self.settings = settings if settings is not None else Settings()
        self._http = httpx.Client(
            timeout=self.settings.timeout,
            headers={"Referer": self.settings.referer},
            transport=transport,
        )

    def _send(self, method: str, url: str, **kwargs) -> str:
        logger.debug(f"{method} {url}")
        try:
            response = self._http.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise TransportError(
                f"{method} {url} timed out after {self.settings.timeout:g}s"
            ) from e
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"{method} {url} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        return response.text

    def query(self, payload: str) -> str:
        """POST a JSON GraphQL payload to the API and return the response body."""
        return self._send(
            "POST",
            self.settings.api_url,
            content=payload.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

    def fetch(self, url: str) -> str:
        """GET ``url`` and return the response body."""
        return self._send("GET", url)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "SkillshareClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
