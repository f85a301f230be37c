from typing import Any

import pytest

_EVENTS = (
    "start_topic_map",
    "end_topic_map",
    "start_topic",
    "end_topic",
    "start_association",
    "end_association",
    "start_role",
    "end_role",
    "start_occurrence",
    "end_occurrence",
    "start_name",
    "end_name",
    "start_variant",
    "end_variant",
    "start_scope",
    "end_scope",
    "start_theme",
    "end_theme",
    "value",
    "subject_identifier",
    "subject_locator",
    "item_identifier",
    "start_player",
    "end_player",
    "start_type",
    "end_type",
    "start_reifier",
    "end_reifier",
    "topic_ref",
    "start_isa",
    "end_isa",
)


class RecordingMapHandler:
    """MapHandler which records every event as ``(name, *args)``."""

    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def names(self) -> list[str]:
        return [event[0] for event in self.events]

    def count(self, name: str) -> int:
        return self.names().count(name)

    def args(self, name: str) -> list[tuple[Any, ...]]:
        return [event[1:] for event in self.events if event[0] == name]


def _recorder(name: str):
    def record(self: RecordingMapHandler, *args: Any) -> None:
        self.events.append((name, *args))

    record.__name__ = name
    return record


for _name in _EVENTS:
    setattr(RecordingMapHandler, _name, _recorder(_name))


@pytest.fixture
def recorder() -> RecordingMapHandler:
    return RecordingMapHandler()


@pytest.fixture
def recorder_factory():
    """Creates independent recording handlers."""
    return RecordingMapHandler
