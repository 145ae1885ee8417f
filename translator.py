"""Chat-completion client that translates a paper's title and abstract into Japanese."""

from __future__ import annotations

import logging

import requests

from config import DEFAULT_OPENAI_MODEL
from errors import MalformedResponseError, TransportError, classify_response
from models import ChatRequest, ChatResponse, Message, Paper

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
REQUEST_TIMEOUT_SECONDS = 60
SERVICE = "openai"

LOGGER = logging.getLogger(__name__)

SYSTEM_PROMPT = """与えられた英語の論文を日本語に訳し、以下のフォーマットで出力してください。
```
タイトル:
タイトルの日本語訳

概要:
概要の日本語訳
```
"""


def build_chat_request(paper: Paper, model: str = DEFAULT_OPENAI_MODEL) -> ChatRequest:
    user_prompt = f"title: {paper.title}\nsummary: {paper.summary}"
    return ChatRequest(
        model=model,
        messages=(
            Message(role="system", content=SYSTEM_PROMPT),
            Message(role="user", content=user_prompt),
        ),
    )


def format_translation(paper: Paper, content: str) -> str:
    """Lay out date, PDF link, original title and translation on separate lines."""
    return (
        f"発行日: {paper.published_at.strftime('%Y-%m-%d')}\n"
        f"{paper.pdf_url}\n"
        f"{paper.title}\n"
        f"{content}\n"
    )


def translate_paper(
    paper: Paper,
    api_key: str,
    *,
    model: str = DEFAULT_OPENAI_MODEL,
    api_url: str = OPENAI_CHAT_URL,
    session: requests.Session | None = None,
) -> str:
    """Translate one paper and return the text to post.

    Raises:
        AuthorizationError: HTTP 401.
        RateLimitError: HTTP 429.
        UnexpectedStatusError: any other non-200 status.
        MalformedResponseError: HTTP 200 with a body that is not a chat
            completion or carries no choices.
        TransportError: no response was received.
    """
    request = build_chat_request(paper, model=model)
    headers = {
        "Accept": "*/*",
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    LOGGER.info("Translating paper_id=%s with model=%s", paper.paper_id, model)
    http = session or requests
    try:
        response = http.post(
            api_url,
            headers=headers,
            json=request.to_dict(),
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        raise TransportError(SERVICE, None, f"Request failed: {exc}") from exc

    classify_response(response, SERVICE)

    try:
        parsed = ChatResponse.from_dict(response.json())
    except (ValueError, KeyError, TypeError) as exc:
        raise MalformedResponseError(
            SERVICE, response.status_code, "Hm, the response didn't match the shape we expected."
        ) from exc

    if not parsed.choices:
        raise MalformedResponseError(SERVICE, response.status_code, "Response contained no choices")

    LOGGER.info(
        "Translation done for paper_id=%s: prompt_tokens=%s completion_tokens=%s",
        paper.paper_id,
        parsed.usage.prompt_tokens,
        parsed.usage.completion_tokens,
    )
    return format_translation(paper, parsed.choices[0].message.content)
