"""LLM-based translation of a teacher's instruction into Classroom API calls.

This module sends the instruction to Gemini together with the command
translator system prompt, validates the returned JSON against
``CommandEnvelope`` and enforces the prompt's business rules on the result.
"""
from __future__ import annotations

import json
import logging
import os
import re
import typing as t
from datetime import date, datetime

import httpx
from pydantic import ValidationError

from classroom_api.gateway import is_create_method, is_list_method
from orchestrator.config import Settings
from orchestrator.errors import TranslationError
from orchestrator.models import ApiCallSpec, CommandEnvelope, PreFlightSpec
from prompts import render_prompt
from registry import list_operation_schemas

logger = logging.getLogger(__name__)

# LLM endpoint - configurable via environment variables
GEMINI_API_URL = os.getenv("GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

# Timeout for the LLM round trip (in seconds)
LLM_TIMEOUT = 60.0

PROMPT_NAME = "command_translator_system_prompt"

DEFAULT_DUE_TIME = {"hours": 23, "minutes": 59}
COURSE_WORK_STATES = ["DRAFT", "PUBLISHED"]
COURSE_WORK_RESOURCE = "Courses.CourseWork"
PUBLISHABLE_RESOURCES = {"Courses.CourseWork", "Courses.Announcements"}

_PUBLISH_WORDS = re.compile(r"\b(publish\w*|post|posts|posted|posting)\b", re.IGNORECASE)
_QUESTION_WORDS = re.compile(r"\bquestions?\b", re.IGNORECASE)


def local_timezone_name() -> str:
    return datetime.now().astimezone().tzname() or "UTC"


def _format_operations() -> str:
    return "\n".join(
        f"- {op['resource']}.{op['method']} params={op['params']}: {op['description']}"
        for op in list_operation_schemas()
    )


def build_system_prompt(settings: Settings, current_date: t.Union[date, str], timezone: str) -> str:
    """Render the command translator prompt for the current context."""
    if isinstance(current_date, date):
        current_date = current_date.isoformat()
    return render_prompt(
        PROMPT_NAME,
        current_date=current_date,
        timezone=timezone,
        course_id=settings.course_id or "",
        operations=_format_operations(),
    )


def build_request_body(system_prompt: str, user_text: str) -> dict[str, t.Any]:
    return {
        "contents": [{"parts": [{"text": system_prompt + user_text}]}],
        "generationConfig": {"responseMimeType": "application/json"},
    }


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```), if any."""
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        end = len(lines)
        for i in range(len(lines) - 1, 0, -1):
            if lines[i].strip() == "```":
                end = i
                break
        text = "\n".join(lines[1:end])
    return text.strip()


def extract_response_text(data: t.Any) -> str:
    """Return the first text part of the first candidate."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        reason = ""
        if isinstance(data, dict):
            reason = (data.get("promptFeedback") or {}).get("blockReason", "")
        raise TranslationError(
            "LLM response contained no candidate text" + (f" (blocked: {reason})" if reason else "")
        )
    if not isinstance(text, str) or not text.strip():
        raise TranslationError("Empty response from LLM")
    return text


def parse_envelope(text: str) -> CommandEnvelope:
    """Parse the model's text into a validated ``CommandEnvelope``."""
    cleaned = strip_code_fence(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise TranslationError(f"Invalid JSON response from LLM: {e}")
    if not isinstance(data, dict):
        raise TranslationError("LLM response is not a JSON object")
    try:
        return CommandEnvelope.model_validate(data)
    except ValidationError as e:
        raise TranslationError(f"LLM response does not match the command format: {e}")


def _ensure_course_work_states(spec: t.Union[ApiCallSpec, PreFlightSpec], course_id: t.Optional[str]) -> None:
    if spec.resource != COURSE_WORK_RESOURCE or not is_list_method(spec.method):
        return
    if not spec.params:
        spec.params = [course_id]
    if len(spec.params) == 1:
        spec.params.append({})
    query = spec.params[1]
    if isinstance(query, dict) and not query.get("courseWorkStates"):
        query["courseWorkStates"] = list(COURSE_WORK_STATES)


def _apply_to_call(call: ApiCallSpec, user_text: str, course_id: t.Optional[str]) -> None:
    if call.method.lower() == "delete":
        call.method = "remove"

    _ensure_course_work_states(call, course_id)
    if call.pre_flight is not None:
        _ensure_course_work_states(call.pre_flight, course_id)

    for param in call.params:
        if isinstance(param, dict) and "dueDate" in param and not param.get("dueTime"):
            param["dueTime"] = dict(DEFAULT_DUE_TIME)

    if not is_create_method(call.method) or len(call.params) < 2:
        return
    body = call.params[1]
    if not isinstance(body, dict):
        return
    if call.resource == COURSE_WORK_RESOURCE and not body.get("workType"):
        body["workType"] = "SHORT_ANSWER_QUESTION" if _QUESTION_WORDS.search(user_text) else "ASSIGNMENT"
    if call.resource in PUBLISHABLE_RESOURCES and not _PUBLISH_WORDS.search(user_text):
        body["state"] = "DRAFT"


def apply_business_rules(
    envelope: CommandEnvelope,
    user_text: str,
    course_id: t.Optional[str] = None,
) -> CommandEnvelope:
    """Return a copy of ``envelope`` with the translator's rules enforced.

    - ``delete`` methods become ``remove``
    - course-work listings request both draft and published items
    - a ``dueDate`` without ``dueTime`` gets 23:59
    - course-work creates get a ``workType``
    - new course work and announcements stay drafts unless the user said
      "publish" or "post"
    """
    envelope = envelope.model_copy(deep=True)
    for call in envelope.actions():
        _apply_to_call(call, user_text, course_id)
    return envelope


def translate_command(
    user_text: str,
    settings: Settings,
    current_date: t.Optional[t.Union[date, str]] = None,
    timezone: t.Optional[str] = None,
    *,
    http_client: t.Optional[httpx.Client] = None,
    model: t.Optional[str] = None,
) -> CommandEnvelope:
    """Translate a natural-language instruction into a ``CommandEnvelope``.

    Args:
        user_text: The teacher's instruction
        settings: Current settings; the Gemini API key is required
        current_date: Date used to resolve relative dates (default: today)
        timezone: Timezone name given to the model (default: local)
        http_client: Optional httpx client, mainly for tests
        model: Gemini model name (default: GEMINI_MODEL)

    Returns:
        The validated envelope with business rules applied

    Raises:
        ConfigurationMissing: If no API key is configured
        TranslationError: If the LLM call fails or its output is malformed
    """
    api_key = settings.require_api_key()
    model = model or GEMINI_MODEL
    system_prompt = build_system_prompt(
        settings,
        current_date or date.today(),
        timezone or local_timezone_name(),
    )
    body = build_request_body(system_prompt, user_text)
    url = f"{GEMINI_API_URL}/models/{model}:generateContent"

    logger.debug("LLM request to %s: %s", url, json.dumps(body)[:2000])
    try:
        if http_client is not None:
            response = http_client.post(url, params={"key": api_key}, json=body)
        else:
            with httpx.Client(timeout=LLM_TIMEOUT) as client:
                response = client.post(url, params={"key": api_key}, json=body)
    except httpx.HTTPError as e:
        logger.error("LLM request failed: %s", e, exc_info=True)
        raise TranslationError(f"Could not reach the LLM service: {e}") from e

    logger.debug("LLM response %s: %s", response.status_code, response.text[:2000])
    if response.status_code != 200:
        logger.error("LLM request returned HTTP %s: %s", response.status_code, response.text)
        raise TranslationError(f"LLM request failed with HTTP {response.status_code}")

    try:
        data = response.json()
    except ValueError as e:
        raise TranslationError(f"LLM service returned a non-JSON body: {e}") from e

    envelope = parse_envelope(extract_response_text(data))
    envelope = apply_business_rules(envelope, user_text, settings.course_id)
    logger.info("Translated command into %d action(s)", len(envelope.actions()))
    return envelope
