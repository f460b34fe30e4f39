"""OpenAI-compatible Chat Completions client pointed at OpenRouter."""

from __future__ import annotations

from typing import Any

import httpx
import openai
import structlog

from scribeai.config import Settings
from scribeai.exceptions import UpstreamServiceError

logger = structlog.get_logger(__name__)

APP_TITLE = "ScribeAI"


def get_client(settings: Settings, api_key: str) -> openai.OpenAI:
    """Create an OpenAI client for the OpenRouter endpoint."""
    return openai.OpenAI(
        api_key=api_key,
        base_url=settings.openrouter_base_url,
        timeout=settings.openrouter_timeout_seconds,
        default_headers={
            "HTTP-Referer": settings.app_url,
            "X-Title": APP_TITLE,
        },
    )


def call_chat_completion(
    client: openai.OpenAI,
    model: str,
    messages: list[dict[str, Any]],
) -> str:
    """Send one chat completion request and return the message text.

    Returns an empty string when the model answers with no content.

    Raises:
        UpstreamServiceError: on network or API failures.
    """
    logger.info("openrouter_call_start", model=model)
    try:
        response = client.chat.completions.create(model=model, messages=messages)
    except openai.APIStatusError as exc:
        logger.warning("openrouter_call_failed", model=model, status=exc.status_code)
        raise UpstreamServiceError(
            f"OpenRouter API Error {exc.status_code}: {exc.message}"
        ) from exc
    except (openai.APIError, httpx.HTTPError) as exc:
        logger.warning("openrouter_call_failed", model=model, error=str(exc))
        raise UpstreamServiceError(f"OpenRouter API Error: {exc}") from exc

    if not response.choices:
        return ""
    content = response.choices[0].message.content or ""
    logger.info("openrouter_call_success", model=model, chars=len(content))
    return content
