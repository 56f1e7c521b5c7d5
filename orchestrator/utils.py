"""Utility functions for the orchestrator."""
import typing as t

from rich.console import Console

console = Console()

UNKNOWN_ITEM = "Unknown Item"


def display_name(item: t.Any) -> str:
    """Best human-readable name of a Classroom item.

    Prefers a person's full name, then a title, then a name.
    """
    if not isinstance(item, dict):
        return UNKNOWN_ITEM
    profile = item.get("profile")
    if isinstance(profile, dict):
        name = profile.get("name")
        if isinstance(name, dict) and name.get("fullName"):
            return str(name["fullName"])
        if profile.get("fullName"):
            return str(profile["fullName"])
    for field in ("title", "name"):
        if item.get(field):
            return str(item[field])
    return UNKNOWN_ITEM


def format_item_list(summary: str, items: t.Sequence[t.Any]) -> str:
    """Render list results as a bulleted list under the action summary."""
    if not items:
        return f"{summary}: No items found."
    lines = [f"{summary}:"]
    lines.extend(f"• {display_name(item)}" for item in items)
    return "\n".join(lines)


def mask_secret(value: t.Optional[str]) -> str:
    """Show only the last four characters of a secret."""
    if not value:
        return "(not set)"
    if len(value) <= 4:
        return "****"
    return "*" * (len(value) - 4) + value[-4:]
