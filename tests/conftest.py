import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest


def make_tool_call(call_id, name, arguments):
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return SimpleNamespace(
        id=call_id,
        type="function",
        function=SimpleNamespace(name=name, arguments=arguments),
    )


def make_run(status, run_id="run_1", tool_calls=None, last_error=None):
    required_action = None
    if tool_calls is not None:
        required_action = SimpleNamespace(
            type="submit_tool_outputs",
            submit_tool_outputs=SimpleNamespace(tool_calls=tool_calls),
        )
    return SimpleNamespace(
        id=run_id,
        status=status,
        required_action=required_action,
        last_error=last_error,
    )


def make_message(role, text, message_id="msg_1"):
    return SimpleNamespace(
        id=message_id,
        role=role,
        content=[SimpleNamespace(type="text", text=SimpleNamespace(value=text))],
    )


class FakePage:
    """Cursor page: `data` is the first page, iterating walks every page."""

    def __init__(self, *pages):
        self.pages = [list(p) for p in pages] or [[]]
        self.data = self.pages[0]

    def __iter__(self):
        for page in self.pages:
            yield from page


class FakeClock:
    """Clock that only moves when the monitor sleeps."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def client():
    client = MagicMock()
    client.beta.threads.messages.list.return_value = FakePage(
        [
            make_message("assistant", "Saved sea.txt for you.", "msg_2"),
            make_message("user", "Write a poem to sea.txt", "msg_1"),
        ]
    )
    return client


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def printed():
    return []
