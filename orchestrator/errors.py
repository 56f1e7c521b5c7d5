"""Error types raised along the command pipeline.

Every error derives from ``CommandError`` so the executor and the orchestrator
can turn any of them into a result line for the user.
"""
from __future__ import annotations


class CommandError(Exception):
    """Base class for failures surfaced to the user as a result string."""


class ConfigurationMissing(CommandError):
    """A required setting (course id or LLM API key) is not configured."""

    def __init__(self, setting: str, hint: str = "") -> None:
        self.setting = setting
        message = f"Missing configuration: '{setting}' is not set."
        if hint:
            message += f" {hint}"
        super().__init__(message)


class TranslationError(CommandError):
    """The LLM call failed or its output could not be parsed into an envelope."""


class PreFlightError(CommandError):
    """A pre-flight lookup could not resolve the target item."""


class NoItemsFoundError(PreFlightError):
    """The pre-flight lookup returned no items at all."""

    def __init__(self, resource: str, method: str) -> None:
        self.resource = resource
        self.method = method
        super().__init__(f"No items found when calling {resource}.{method}.")


class NoMatchError(PreFlightError):
    """The pre-flight filter removed every candidate."""

    def __init__(self, key: str, value: str, detail: str = "") -> None:
        self.key = key
        self.value = value
        message = f"No item with {key} matching '{value}' was found."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class InvalidMethodError(CommandError):
    """The resource/method pair is not a registered Classroom operation."""

    def __init__(self, resource: str, method: str, available: list[str] | None = None) -> None:
        self.resource = resource
        self.method = method
        message = f"Invalid method '{method}' for resource '{resource}'."
        if available:
            message += f" Available methods: {', '.join(available)}"
        super().__init__(message)


class RemoteCallError(CommandError):
    """The Classroom API call itself failed (HTTP error, timeout, transport)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class InvalidParamsError(RemoteCallError):
    """The parameters cannot be mapped onto the operation's signature."""
