"""Tests for the MCP tool functions."""
import functools

from conftest import COURSE_ID
from mcp_gateway.server import _get_gateway_info, _run_classroom_command, _set_course
from orchestrator.config import PropertyStore
from orchestrator.translator import translate_command


def test_set_course_tool(tmp_path) -> None:
    """Test that set_course persists the course id."""
    store = PropertyStore(tmp_path / "properties.json")

    assert _set_course("42", store=store) == "Active course set to 42"
    assert store.load().course_id == "42"
    assert _set_course("", store=store).startswith("Could not set course")


def test_gateway_info_reports_missing_settings(tmp_path, monkeypatch) -> None:
    """Test that gateway info shows which settings are missing."""
    monkeypatch.delenv("CLASSROOM_COURSE_ID", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    info = _get_gateway_info(store=PropertyStore(tmp_path / "properties.json"))

    assert info["course_id"] == "(not set)"
    assert info["gemini_api_key"] == "(not set)"
    assert info["gateway_status"] == "running"


def test_run_classroom_command_tool(tmp_path, gateway, classroom, fake_gemini) -> None:
    """Test a full command through the MCP tool function."""
    store = PropertyStore(tmp_path / "properties.json")
    store.set_course(COURSE_ID)
    store.set_api_key("test-key")
    classroom.seed_student(COURSE_ID, "Katherine Johnson")
    fake_gemini.reply_with({
        "apiCall": {"resource": "Courses.Students", "method": "list", "params": [COURSE_ID], "summary": "Roster"}
    })

    report = _run_classroom_command(
        "list my students",
        store=store,
        gateway=gateway,
        translate=functools.partial(translate_command, http_client=fake_gemini.client),
    )

    assert report == "Roster:\n• Katherine Johnson"
