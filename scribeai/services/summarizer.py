"""Gemini summarization of cleaned OCR text."""

from __future__ import annotations

import re

import structlog
from google import genai
from google.genai import errors as genai_errors

from scribeai.config import Settings
from scribeai.exceptions import ConfigurationError, UpstreamServiceError
from scribeai.schemas.common import SummaryEntities, SummaryResult
from scribeai.services.llm_json import as_string_list, as_text, parse_json_object

logger = structlog.get_logger(__name__)

FALLBACK_SUMMARY_CHARS = 500
_BULLET_MARKER = re.compile(r"^[-•]\s*")

# ---------------------------------------------------------------------------
# PROMPT
# ---------------------------------------------------------------------------

SUMMARY_PROMPT = """You are an expert academic assistant.

Analyze the following OCR extracted text from handwritten notes.

Tasks:
1. Clean formatting errors and OCR noise.
2. Extract key ideas and important information.
3. Create a structured analysis.

IMPORTANT: Return ONLY valid JSON with this exact structure, no markdown formatting:
{{
  "executiveSummary": "A comprehensive summary of 100-150 words covering the main points",
  "bulletPoints": ["Key point 1", "Key point 2", "Key point 3", "..."],
  "keyTopics": ["Topic1", "Topic2", "Topic3", "..."],
  "entities": {{
    "dates": ["any dates mentioned"],
    "people": ["any names mentioned"],
    "organizations": ["any organizations mentioned"],
    "amounts": ["any monetary amounts or percentages mentioned"]
  }}
}}

Text:
\"\"\"
{text}
\"\"\""""


def build_prompt(text: str) -> str:
    return SUMMARY_PROMPT.format(text=text)


def _fallback_summary(response_text: str) -> SummaryResult:
    bullets = []
    for line in response_text.split("\n"):
        stripped = line.strip()
        if stripped.startswith(("-", "•")):
            point = _BULLET_MARKER.sub("", stripped).strip()
            if point:
                bullets.append(point)
    return SummaryResult(
        executive_summary=response_text[:FALLBACK_SUMMARY_CHARS],
        bullet_points=bullets,
    )


def parse_summary_response(response_text: str) -> SummaryResult:
    """Decode the model's answer, defaulting every missing field.

    When the answer is not a JSON object, a heuristic summary is built from
    the raw text instead.
    """
    data = parse_json_object(response_text)
    if data is None:
        logger.info("summary_unparsed_response", chars=len(response_text))
        return _fallback_summary(response_text)

    entities = data.get("entities")
    if not isinstance(entities, dict):
        entities = {}
    return SummaryResult(
        executive_summary=as_text(data.get("executiveSummary")),
        bullet_points=as_string_list(data.get("bulletPoints")),
        key_topics=as_string_list(data.get("keyTopics")),
        entities=SummaryEntities(
            dates=as_string_list(entities.get("dates")),
            people=as_string_list(entities.get("people")),
            organizations=as_string_list(entities.get("organizations")),
            amounts=as_string_list(entities.get("amounts")),
        ),
    )


def summarize_text(text: str, settings: Settings) -> SummaryResult:
    """Summarize cleaned text with Gemini.

    Raises:
        ConfigurationError: if GEMINI_API_KEY is not set.
        UpstreamServiceError: if the Gemini call fails.
    """
    if not settings.gemini_api_key:
        raise ConfigurationError("Missing GEMINI_API_KEY environment variable")

    client = genai.Client(api_key=settings.gemini_api_key)
    logger.info("gemini_call_start", model=settings.gemini_model, chars=len(text))
    try:
        response = client.models.generate_content(
            model=settings.gemini_model,
            contents=build_prompt(text),
        )
    except genai_errors.APIError as exc:
        logger.warning("gemini_call_failed", model=settings.gemini_model, error=str(exc))
        raise UpstreamServiceError(f"Gemini API error: {exc}") from exc

    response_text = response.text or ""
    logger.info("gemini_call_success", model=settings.gemini_model, chars=len(response_text))
    return parse_summary_response(response_text)
