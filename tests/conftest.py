"""Shared fixtures for the runfx test-suite."""

import pytest


class RecordingConsole:
    """Console double that records every logged message."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def log(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def console() -> RecordingConsole:
    return RecordingConsole()
