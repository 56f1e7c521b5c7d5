"""Execution of translated Classroom actions.

This module resolves pre-flight lookups, invokes each action through the
gateway and turns every outcome (success or failure) into a line of text for
the user.
"""
from __future__ import annotations

import logging
import typing as t

from classroom_api.gateway import ClassroomGateway, is_list_method
from orchestrator.config import Settings
from orchestrator.errors import CommandError, NoItemsFoundError, NoMatchError
from orchestrator.models import ApiCallSpec, PreFlightSpec
from orchestrator.utils import format_item_list

logger = logging.getLogger(__name__)

ProgressCallback = t.Callable[[int, int, ApiCallSpec, t.Optional[str]], None]


def resolve_pre_flight(
    pre_flight: PreFlightSpec,
    settings: Settings,
    gateway: ClassroomGateway,
) -> list[t.Any]:
    """Resolve an item described by name to ``[courseId, identifier]``.

    The first item, in list order, whose ``filter.key`` field contains
    ``filter.value`` (case-insensitive) is selected. Items without the field,
    or with a non-string value, are skipped.

    Raises:
        NoItemsFoundError: If the lookup returns no items
        NoMatchError: If no item matches the filter, or the match lacks the selected field
    """
    result = gateway.invoke(pre_flight.resource, pre_flight.method, pre_flight.params)
    if not result.items:
        raise NoItemsFoundError(pre_flight.resource, pre_flight.method)

    key = pre_flight.filter.key
    needle = pre_flight.filter.value.lower()
    match = next(
        (
            item for item in result.items
            if isinstance(item.get(key), str) and needle in item[key].lower()
        ),
        None,
    )
    if match is None:
        raise NoMatchError(key, pre_flight.filter.value)

    if match.get(pre_flight.select) is None:
        raise NoMatchError(
            key,
            pre_flight.filter.value,
            f"The matching item has no '{pre_flight.select}' field.",
        )
    identifier = match[pre_flight.select]
    logger.info(
        "Pre-flight resolved %s '%s' to %s=%s",
        key, pre_flight.filter.value, pre_flight.select, identifier,
    )
    return [settings.course_id, identifier]


def execute_action(call: ApiCallSpec, settings: Settings, gateway: ClassroomGateway) -> str:
    """Run one action and describe its outcome. Never raises."""
    summary = call.summary or f"{call.resource}.{call.method}"
    try:
        params = call.params
        if call.pre_flight is not None:
            params = resolve_pre_flight(call.pre_flight, settings, gateway)

        result = gateway.invoke(call.resource, call.method, params)

        if is_list_method(call.method):
            return format_item_list(summary, result.items)
        return f"Completed: {summary}"

    except CommandError as e:
        logger.warning("Action '%s' failed: %s", summary, e)
        return f"Failed: {summary}: {e}"
    except Exception as e:
        logger.error("Unexpected error in action '%s'", summary, exc_info=True)
        return f"Failed: {summary}: unexpected error: {e}"


def execute_actions(
    calls: t.Sequence[ApiCallSpec],
    settings: Settings,
    gateway: ClassroomGateway,
    progress_callback: t.Optional[ProgressCallback] = None,
) -> list[str]:
    """Run actions strictly in order; a failure does not stop later actions.

    Args:
        calls: The actions to run
        settings: Current settings
        gateway: Gateway used for every call
        progress_callback: Optional callback called before and after each action
                           with (current_action_num, total_actions, call, outcome).
                           - Before execution: outcome is None
                           - After execution: outcome is the result line

    Returns:
        One result line per action, in order
    """
    outcomes: list[str] = []
    total = len(calls)
    for number, call in enumerate(calls, start=1):
        if progress_callback:
            progress_callback(number, total, call, None)
        outcome = execute_action(call, settings, gateway)
        outcomes.append(outcome)
        if progress_callback:
            progress_callback(number, total, call, outcome)
    return outcomes
