"""HTTP client with timeouts and a fixed client identity."""

from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType

import requests

from pos_import.common.constants import USER_AGENT
from pos_import.common.errors import PipelineError


@dataclass(frozen=True)
class TimeoutConfig:
    connect: float = 5.0
    read: float = 10.0


class HttpRequestError(PipelineError):
    error_code = "HTTP_ERROR"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class HttpClient:
    def __init__(
        self,
        *,
        timeout: TimeoutConfig | None = None,
        user_agent: str = USER_AGENT,
    ) -> None:
        self.timeout = timeout or TimeoutConfig()
        self.user_agent = user_agent
        self.session = requests.Session()

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _headers(self, headers: dict[str, str] | None) -> dict[str, str]:
        out = {"User-Agent": self.user_agent}
        if headers:
            out.update(headers)
        return out

    def get_text(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: TimeoutConfig | None = None,
    ) -> str:
        """Issue one GET and return the body text if the status is 200.

        Transport failures propagate as ``requests.RequestException``.
        """
        req_timeout = timeout or self.timeout
        response = self.session.request(
            method="GET",
            url=url,
            headers=self._headers(headers),
            timeout=(req_timeout.connect, req_timeout.read),
        )
        if response.status_code != 200:
            raise HttpRequestError(f"HTTP status: {response.status_code}", status_code=response.status_code)
        return response.text or ""
