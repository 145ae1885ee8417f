"""Error taxonomy for the pipeline and HTTP status classification."""

from __future__ import annotations

import requests


class PipelineError(Exception):
    """Base class for every error raised by the pipeline modules."""


class ConfigurationError(PipelineError):
    """A required environment value is missing or unusable."""


class FetchError(PipelineError):
    """The arXiv search could not be completed."""


class ApiError(PipelineError):
    """A downstream API call (chat completion or Slack) failed.

    Attributes:
        service: Short name of the API that failed, e.g. ``"openai"``.
        status_code: HTTP status of the response, or None when no response
            was received at all.
        detail: Human-readable description.
    """

    def __init__(self, service: str, status_code: int | None, detail: str) -> None:
        self.service = service
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{service}: {detail}")


class AuthorizationError(ApiError):
    """HTTP 401, the credential is stale or invalid."""


class RateLimitError(ApiError):
    """HTTP 429."""

    def __init__(
        self,
        service: str,
        status_code: int | None,
        detail: str,
        retry_after: str | None = None,
    ) -> None:
        super().__init__(service, status_code, detail)
        self.retry_after = retry_after


class MalformedResponseError(ApiError):
    """HTTP 200 whose body does not have the expected shape."""


class UnexpectedStatusError(ApiError):
    """Any other non-success HTTP status."""


class TransportError(ApiError):
    """No HTTP response was received (connection failure, timeout)."""


def classify_response(response: requests.Response, service: str) -> None:
    """Raise the matching ApiError for a non-200 response; return for 200."""
    status = response.status_code
    if status == 200:
        return
    if status == 401:
        raise AuthorizationError(service, status, "Status: UNAUTHORIZED - Need to grab a new token")
    if status == 429:
        raise RateLimitError(
            service,
            status,
            "Status: 429 - Too many requests",
            retry_after=response.headers.get("Retry-After"),
        )
    raise UnexpectedStatusError(service, status, f"Status: {status} - Something unexpected happened")
