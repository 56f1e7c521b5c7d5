"""Shared fixtures: a mock Classroom backend, settings and a fake Gemini endpoint."""
import json
import typing as t

import httpx
import pytest
from fastapi.testclient import TestClient

from classroom_api.client import ClassroomClient
from classroom_api.gateway import ClassroomGateway
from orchestrator.config import Settings
from orchestrator.models import RemoteResult
from services.classroom_service import mock_app

COURSE_ID = "c-101"


class RecordingGateway(ClassroomGateway):
    """Gateway that records every invocation before delegating."""

    def __init__(self, *args: t.Any, **kwargs: t.Any) -> None:
        super().__init__(*args, **kwargs)
        self.calls: list[tuple[str, str, list]] = []

    def invoke(self, resource: str, method: str, params: t.Sequence[t.Any]) -> RemoteResult:
        self.calls.append((resource, method, list(params)))
        return super().invoke(resource, method, params)


class FakeGemini:
    """Stands in for the Gemini generateContent endpoint."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: t.Any = None

    def reply_with(self, payload: t.Any, status_code: int = 200) -> None:
        """Answer with ``payload`` as the first candidate's text.

        Dicts are serialized to JSON; strings are sent as-is.
        """
        text = payload if isinstance(payload, str) else json.dumps(payload)
        self.status_code = status_code
        self.body = {"candidates": [{"content": {"parts": [{"text": text}]}}]}

    def reply_raw(self, body: t.Any, status_code: int = 200) -> None:
        self.status_code = status_code
        self.body = body

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self._handle))

    def last_request_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def classroom():
    """Mock Classroom store with one empty course."""
    mock_app.reset_store()
    mock_app.seed_course("Biology 101", course_id=COURSE_ID)
    yield mock_app
    mock_app.reset_store()


@pytest.fixture
def classroom_client(classroom) -> ClassroomClient:
    return ClassroomClient(
        base_url="http://testserver",
        access_token="test-token",
        http_client=TestClient(classroom.app),
    )


@pytest.fixture
def gateway(classroom_client) -> RecordingGateway:
    return RecordingGateway(classroom_client)


@pytest.fixture
def settings() -> Settings:
    return Settings(course_id=COURSE_ID, gemini_api_key="test-key")


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()
