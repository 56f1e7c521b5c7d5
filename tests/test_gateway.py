"""Tests for the Classroom gateway and HTTP client.

This module tests registry dispatch, the create-parameter ordering, typed list
unwrapping and error wrapping.
"""
import typing as t

import httpx
import pytest

from classroom_api.client import ClassroomClient
from classroom_api.gateway import ClassroomGateway, order_arguments
from conftest import COURSE_ID
from orchestrator.errors import InvalidMethodError, InvalidParamsError, RemoteCallError
from registry import Operation
from services.shared.models import ListCourseWorkResponse


def make_registry(calls: list[tuple], raw: t.Any = None) -> dict[tuple[str, str], Operation]:
    """Build a registry of recording handlers."""

    def create(client: t.Any, body: t.Any, course_id: t.Any) -> t.Any:
        calls.append(("create", body, course_id))
        return {"id": "new"}

    def remove(client: t.Any, course_id: t.Any, item_id: t.Any) -> t.Any:
        calls.append(("remove", course_id, item_id))
        return {}

    def list_items(client: t.Any, course_id: t.Any, query: t.Any = None) -> t.Any:
        calls.append(("list", course_id, query))
        return raw

    def broken(client: t.Any, course_id: t.Any) -> t.Any:
        raise RuntimeError("socket closed")

    return {
        ("Courses.CourseWork", "create"): Operation("Courses.CourseWork", "create", create, "", ""),
        ("Courses.CourseWork", "remove"): Operation("Courses.CourseWork", "remove", remove, "", ""),
        ("Courses.CourseWork", "list"): Operation(
            "Courses.CourseWork", "list", list_items, "", "", ListCourseWorkResponse, "courseWork"
        ),
        ("Courses.CourseWork", "get"): Operation("Courses.CourseWork", "get", broken, "", ""),
    }


def test_create_params_are_passed_as_body_then_course_id() -> None:
    """Test that create receives (params[1], params[0]) and extra params are ignored."""
    calls: list[tuple] = []
    gateway = ClassroomGateway(client=object(), registry=make_registry(calls))

    body = {"title": "Essay"}
    gateway.invoke("Courses.CourseWork", "create", [COURSE_ID, body, "ignored", 42])

    assert calls == [("create", body, COURSE_ID)]


def test_other_methods_receive_params_unchanged() -> None:
    """Test that non-create methods get params spread positionally."""
    calls: list[tuple] = []
    gateway = ClassroomGateway(client=object(), registry=make_registry(calls))

    gateway.invoke("Courses.CourseWork", "remove", [COURSE_ID, "cw-1"])

    assert calls == [("remove", COURSE_ID, "cw-1")]


@pytest.mark.parametrize("method", ["create", "Create", "batchCREATE", "createDraft"])
def test_create_detection_is_case_insensitive(method: str) -> None:
    """Test that any method name containing 'create' is reordered."""
    assert order_arguments(method, ["course", {"title": "x"}]) == [{"title": "x"}, "course"]


def test_create_with_too_few_params_is_rejected() -> None:
    """Test that create without a body fails before any call."""
    calls: list[tuple] = []
    gateway = ClassroomGateway(client=object(), registry=make_registry(calls))

    with pytest.raises(InvalidParamsError):
        gateway.invoke("Courses.CourseWork", "create", [COURSE_ID])

    assert calls == []


def test_unknown_method_raises_invalid_method_without_calling() -> None:
    """Test that an unregistered method is reported with resource and method names."""
    calls: list[tuple] = []
    gateway = ClassroomGateway(client=object(), registry=make_registry(calls))

    with pytest.raises(InvalidMethodError) as exc_info:
        gateway.invoke("Courses.CourseWork", "delete", [COURSE_ID, "cw-1"])

    assert calls == []
    assert exc_info.value.resource == "Courses.CourseWork"
    assert exc_info.value.method == "delete"
    assert "delete" in str(exc_info.value)
    assert "Courses.CourseWork" in str(exc_info.value)
    assert "remove" in str(exc_info.value)


def test_unknown_resource_raises_invalid_method() -> None:
    """Test that an unknown resource path is rejected."""
    gateway = ClassroomGateway(client=object(), registry=make_registry([]))

    with pytest.raises(InvalidMethodError) as exc_info:
        gateway.invoke("Courses.Grades", "list", [COURSE_ID])

    assert "Courses.Grades" in str(exc_info.value)


def test_wrong_arity_is_reported_as_invalid_params() -> None:
    """Test that params that do not fit the handler signature are rejected."""
    calls: list[tuple] = []
    gateway = ClassroomGateway(client=object(), registry=make_registry(calls))

    with pytest.raises(InvalidParamsError):
        gateway.invoke("Courses.CourseWork", "remove", [COURSE_ID])

    assert calls == []


def test_handler_failure_is_wrapped_in_remote_call_error() -> None:
    """Test that unexpected handler exceptions become RemoteCallError."""
    gateway = ClassroomGateway(client=object(), registry=make_registry([]))

    with pytest.raises(RemoteCallError) as exc_info:
        gateway.invoke("Courses.CourseWork", "get", [COURSE_ID])

    assert "socket closed" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_list_unwraps_the_declared_collection_field() -> None:
    """Test that the typed schema picks courseWork even if another array comes first."""
    raw = {
        "warnings": ["partial results"],
        "courseWork": [{"id": "1", "title": "Essay"}, {"id": "2", "title": "Lab"}],
    }
    gateway = ClassroomGateway(client=object(), registry=make_registry([], raw=raw))

    result = gateway.invoke("Courses.CourseWork", "list", [COURSE_ID])

    assert [item["title"] for item in result.items] == ["Essay", "Lab"]
    assert result.raw == raw


def test_list_without_collection_field_yields_no_items() -> None:
    """Test that a response without the collection field is an empty list."""
    gateway = ClassroomGateway(client=object(), registry=make_registry([], raw={}))

    result = gateway.invoke("Courses.CourseWork", "list", [COURSE_ID])

    assert result.items == []


def test_list_course_work_against_mock_service(gateway, classroom) -> None:
    """Test listing course work end to end through the mock Classroom API."""
    classroom.seed_course_work(COURSE_ID, "Essay")
    classroom.seed_course_work(COURSE_ID, "Draft Quiz", state="DRAFT")

    published = gateway.invoke("Courses.CourseWork", "list", [COURSE_ID])
    everything = gateway.invoke(
        "Courses.CourseWork", "list", [COURSE_ID, {"courseWorkStates": ["DRAFT", "PUBLISHED"]}]
    )

    assert [item["title"] for item in published.items] == ["Essay"]
    assert [item["title"] for item in everything.items] == ["Essay", "Draft Quiz"]


def test_empty_list_against_mock_service(gateway) -> None:
    """Test that an empty course yields no items (the API omits the field)."""
    result = gateway.invoke("Courses.Students", "list", [COURSE_ID])

    assert result.raw == {}
    assert result.items == []


def test_create_against_mock_service(gateway, classroom) -> None:
    """Test that a canonical [courseId, body] create reaches the API."""
    result = gateway.invoke(
        "Courses.CourseWork", "create", [COURSE_ID, {"title": "Essay", "workType": "ASSIGNMENT"}]
    )

    assert result.raw["title"] == "Essay"
    assert result.raw["courseId"] == COURSE_ID
    assert classroom.course_work[COURSE_ID][0]["title"] == "Essay"


def test_http_error_becomes_remote_call_error(gateway) -> None:
    """Test that a 404 from the API is wrapped with its status code."""
    with pytest.raises(RemoteCallError) as exc_info:
        gateway.invoke("Courses.CourseWork", "remove", [COURSE_ID, "missing"])

    assert exc_info.value.status_code == 404
    assert "404" in str(exc_info.value)


def test_client_sends_bearer_token_and_quotes_ids() -> None:
    """Test request headers and path encoding of the HTTP client."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    client = ClassroomClient(
        base_url="https://classroom.example",
        access_token="secret",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    gateway = ClassroomGateway(client)

    gateway.invoke("Courses.Students", "remove", ["c/1", "ada@example.com"])

    request = seen[0]
    assert request.method == "DELETE"
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.url.raw_path.decode() == "/v1/courses/c%2F1/students/ada%40example.com"


def test_client_timeout_becomes_remote_call_error() -> None:
    """Test that transport timeouts are reported as RemoteCallError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = ClassroomClient(
        base_url="https://classroom.example",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )

    with pytest.raises(RemoteCallError) as exc_info:
        client.get("/v1/courses")

    assert "timed out" in str(exc_info.value)
