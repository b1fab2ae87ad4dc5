"""Shared helpers for provider HTTP calls."""

from typing import Any, Callable

import httpx

from speech_coach.exceptions import ProviderUnavailable, TimedOut

ClientFactory = Callable[..., httpx.AsyncClient]


def request_error(
    provider_id: str, action: str, error: httpx.HTTPError
) -> ProviderUnavailable:
    """Maps a transport error to a provider failure; client timeouts become TimedOut."""
    if isinstance(error, httpx.TimeoutException):
        return TimedOut(provider_id, f"{action} timed out: {error}", error)
    return ProviderUnavailable(provider_id, f"{action} failed: {error}", error)


def read_json(provider_id: str, response: httpx.Response) -> dict[str, Any]:
    """
    Returns the decoded JSON object of a successful response.

    Raises:
        ProviderUnavailable: On a non-2xx status or a body that is not a JSON
            object.
    """
    if response.is_error:
        raise ProviderUnavailable(
            provider_id, f"HTTP {response.status_code}: {response.text[:200]}"
        )
    try:
        body = response.json()
    except ValueError as e:
        raise ProviderUnavailable(provider_id, "response is not valid JSON", e) from e
    if not isinstance(body, dict):
        raise ProviderUnavailable(
            provider_id, f"expected a JSON object, got {type(body).__name__}"
        )
    return body
