"""Slack Web API integration for posting translated papers."""

from __future__ import annotations

import logging

import requests

from errors import TransportError, classify_response
from models import SlackMessage

SLACK_POST_MESSAGE_URL = "https://slack.com/api/chat.postMessage"
REQUEST_TIMEOUT_SECONDS = 30
SERVICE = "slack"

LOGGER = logging.getLogger(__name__)


def post_message(
    message: SlackMessage,
    token: str,
    *,
    api_url: str = SLACK_POST_MESSAGE_URL,
    session: requests.Session | None = None,
) -> str:
    """Post one message with chat.postMessage and return the raw response body.

    Status classification matches the translator: 401, 429 and any other
    non-200 status raise the corresponding ApiError subclass.
    """
    headers = {
        "Accept": "*/*",
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }

    http = session or requests
    try:
        response = http.post(
            api_url,
            headers=headers,
            json=message.to_dict(),
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        raise TransportError(SERVICE, None, f"Request failed: {exc}") from exc

    classify_response(response, SERVICE)

    body = response.text
    _warn_if_not_ok(response, message.channel)
    return body


def _warn_if_not_ok(response: requests.Response, channel: str) -> None:
    # Slack reports most API-level failures as HTTP 200 with "ok": false.
    try:
        payload = response.json()
    except ValueError:
        return
    if isinstance(payload, dict) and payload.get("ok") is False:
        LOGGER.warning(
            "Slack accepted the request for channel=%s but reported error=%s",
            channel,
            payload.get("error"),
        )
