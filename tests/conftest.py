from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any

import pytest

from app import create_app
from sonic_invoker import ModelInvoker


class FakeCompletions:
    """Stands in for ``client.chat.completions``; replays canned replies."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.replies: list[Any] = []

    def reply_with(self, *replies: Any) -> None:
        self.replies = [json.dumps(r) if isinstance(r, dict) else r for r in replies]

    def create(self, **kwargs: Any) -> object:
        self.calls.append(kwargs)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        message = SimpleNamespace(content=reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    @property
    def last_prompt(self) -> str:
        return self.calls[-1]["messages"][-1]["content"]


@pytest.fixture
def completions() -> FakeCompletions:
    return FakeCompletions()


@pytest.fixture
def invoker(completions: FakeCompletions) -> ModelInvoker:
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return ModelInvoker(client, "test-model")


@pytest.fixture
def client(invoker: ModelInvoker):
    flask_app = create_app(invoker)
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as test_client:
        yield test_client
