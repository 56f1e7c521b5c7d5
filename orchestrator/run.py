"""Top-level entry point for natural-language Classroom commands.

``run_command`` is the boundary to the interactive surfaces (CLI, MCP tools):
it always returns a report string and never raises.
"""
from __future__ import annotations

import logging
import typing as t
from datetime import date

from classroom_api.gateway import ClassroomGateway
from orchestrator.config import Settings
from orchestrator.errors import CommandError
from orchestrator.executor import ProgressCallback, execute_actions
from orchestrator.models import CommandEnvelope
from orchestrator.translator import translate_command

logger = logging.getLogger(__name__)

EMPTY_COMMAND_MESSAGE = "Please enter a command."
NO_ACTION_MESSAGE = "No valid action was returned for this command."
REPORT_SEPARATOR = "\n\n"

Translate = t.Callable[..., CommandEnvelope]


def run_command(
    user_text: str,
    settings: Settings,
    *,
    gateway: t.Optional[ClassroomGateway] = None,
    translate: t.Optional[Translate] = None,
    current_date: t.Optional[date] = None,
    timezone: t.Optional[str] = None,
    progress_callback: t.Optional[ProgressCallback] = None,
) -> str:
    """Translate ``user_text`` and run the resulting actions.

    Args:
        user_text: The teacher's instruction
        settings: Current settings (course id and Gemini API key)
        gateway: Classroom gateway (default: one over the live API)
        translate: Translator callable (default: ``translate_command``)
        current_date: Date given to the translator (default: today)
        timezone: Timezone name given to the translator (default: local)
        progress_callback: Passed through to ``execute_actions``

    Returns:
        A report with one outcome per action, separated by blank lines
    """
    if not user_text or not user_text.strip():
        return EMPTY_COMMAND_MESSAGE
    user_text = user_text.strip()

    try:
        settings.require_api_key()
        settings.require_course_id()
    except CommandError as e:
        logger.warning("Command rejected: %s", e)
        return str(e)

    translate = translate or translate_command
    try:
        envelope = translate(user_text, settings, current_date, timezone)
    except CommandError as e:
        logger.warning("Translation failed for %r: %s", user_text, e)
        return f"Could not understand the command: {e}"
    except Exception as e:
        logger.error("Unexpected translation failure for %r", user_text, exc_info=True)
        return f"Could not understand the command: unexpected error: {e}"

    calls = envelope.actions()
    if not calls:
        logger.info("No actions returned for %r", user_text)
        return NO_ACTION_MESSAGE

    try:
        gateway = gateway or ClassroomGateway()
        outcomes = execute_actions(calls, settings, gateway, progress_callback)
    except Exception as e:
        logger.error("Unexpected failure while executing %r", user_text, exc_info=True)
        return f"Command failed: unexpected error: {e}"

    return REPORT_SEPARATOR.join(outcomes)
