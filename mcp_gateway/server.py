"""
MCP Gateway Server - natural-language Classroom commands as MCP tools.

This server exposes the command pipeline to MCP clients: an assistant can pass a
teacher's instruction to ``run_classroom_command`` and show the returned report,
and manage the active course through ``set_course``.
"""
from __future__ import annotations

import typing as t

from fastmcp import FastMCP

from classroom_api.client import CLASSROOM_API_URL
from classroom_api.gateway import ClassroomGateway
from orchestrator.config import PropertyStore
from orchestrator.run import run_command
from orchestrator.translator import GEMINI_API_URL, GEMINI_MODEL
from registry import list_operation_schemas

# Create the MCP server
mcp = FastMCP("ClassroomAssistantGateway")


def _run_classroom_command(
    command: str,
    store: t.Optional[PropertyStore] = None,
    gateway: t.Optional[ClassroomGateway] = None,
    **kwargs: t.Any,
) -> str:
    """Run a natural-language command against the active course."""
    store = store or PropertyStore()
    return run_command(command, store.load(), gateway=gateway, **kwargs)


def _set_course(course_id: str, store: t.Optional[PropertyStore] = None) -> str:
    """Set the active course id."""
    store = store or PropertyStore()
    try:
        settings = store.set_course(course_id)
    except ValueError as e:
        return f"Could not set course: {e}"
    return f"Active course set to {settings.course_id}"


def _get_gateway_info(store: t.Optional[PropertyStore] = None) -> dict[str, str]:
    """
    Get the endpoints the gateway talks to and whether settings are present.
    """
    settings = (store or PropertyStore()).load()
    return {
        "classroom_api": CLASSROOM_API_URL,
        "llm_api": GEMINI_API_URL,
        "llm_model": GEMINI_MODEL,
        "course_id": settings.course_id or "(not set)",
        "gemini_api_key": "set" if settings.gemini_api_key else "(not set)",
        "gateway_status": "running",
    }


@mcp.tool()
def run_classroom_command(command: str) -> str:
    """Run a natural-language Google Classroom command (e.g. "delete assignment test")."""
    return _run_classroom_command(command)


@mcp.tool()
def set_course(course_id: str) -> str:
    """Set the Classroom course that commands apply to."""
    return _set_course(course_id)


@mcp.tool()
def list_operations() -> list[dict]:
    """List the Classroom operations commands can be translated into."""
    return list_operation_schemas()


@mcp.tool()
def get_gateway_info() -> dict[str, str]:
    """
    Get information about the gateway and the services it connects to.
    """
    return _get_gateway_info()


if __name__ == "__main__":
    print("🌟 Starting Classroom Assistant MCP Gateway")
    for name, value in _get_gateway_info().items():
        print(f"  • {name}: {value}")
    print(f"\n🔧 {len(list_operation_schemas())} Classroom operations available")
    print("\n🌐 Starting MCP server...")
    mcp.run()
