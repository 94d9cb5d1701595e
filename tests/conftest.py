# tests/conftest.py
from typing import Any

import pytest

from core.config import AnalyticsSettings, ConversationsSettings
from core.interfaces.transport import RequestDescriptor


class FakeTransport:
    """Transport double: returns a canned payload or raises a canned error."""

    def __init__(self, payload: Any = None, error: BaseException | None = None):
        self.payload = payload if payload is not None else {"Results": []}
        self.error = error
        self.requests: list[RequestDescriptor] = []

    async def send(self, request: RequestDescriptor) -> dict[str, Any]:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.payload


class RecordingSink:
    """Analytics sink that keeps every tracked event."""

    def __init__(self):
        self.events: list[Any] = []
        self.configs: list[AnalyticsSettings] = []

    def track(self, event, config):
        self.events.append(event)
        self.configs.append(config)


@pytest.fixture
def settings():
    return ConversationsSettings(
        _env_file=None,
        api_key="test-key",
        client_id="acme",
        api_base_url="https://api.test/data",
    )


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def product_payload():
    return {
        "HasErrors": False,
        "Errors": [],
        "Limit": 10,
        "Offset": 0,
        "TotalResults": 1,
        "Locale": "en_US",
        "Results": [
            {
                "Id": "test1",
                "Name": "Espresso Machine",
                "Brand": {"Id": "brand-1", "Name": "Acme"},
                "CategoryId": "kitchen",
                "ReviewIds": ["r1", "r2"],
                "QuestionIds": ["q1", "q2", "q3"],
            }
        ],
        "Includes": {
            "Reviews": {
                "r1": {"Id": "r1", "ProductId": "test1", "Rating": 5, "Title": "Great"},
                "r2": {"Id": "r2", "ProductId": "test1", "Rating": 2, "Title": "Meh"},
            },
            "Questions": {
                "q1": {"Id": "q1", "ProductId": "test1", "CategoryId": "kitchen"},
                "q2": {"Id": "q2", "ProductId": "test1"},
                "q3": {"Id": "q3", "ProductId": "test1", "AnswerIds": ["a1"]},
            },
            "Answers": {"a1": {"Id": "a1", "QuestionId": "q3", "AnswerText": "Yes"}},
        },
    }


@pytest.fixture
def questions_payload():
    return {
        "HasErrors": False,
        "Limit": 10,
        "Offset": 0,
        "TotalResults": 2,
        "Results": [
            {"Id": "q1", "ProductId": "test1", "AnswerIds": ["a1"], "TotalAnswerCount": 1},
            {"Id": "q2", "ProductId": "test1", "AnswerIds": [], "TotalAnswerCount": 0},
        ],
        "Includes": {
            "Answers": {"a1": {"Id": "a1", "QuestionId": "q1", "AnswerText": "It works"}},
            "Products": {"test1": {"Id": "test1", "Name": "Espresso Machine"}},
        },
    }
