"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from resprops import DeprecationNotice, PropertyState, set_deprecation_sink


class CollectingSink:
    """Deprecation sink that records notices instead of warning."""

    def __init__(self) -> None:
        self.notices: list[DeprecationNotice] = []

    def emit(self, notice: DeprecationNotice) -> None:
        self.notices.append(notice)

    def kinds(self) -> list:
        return [n.kind for n in self.notices]


class Host:
    """Minimal resource context: a name and a PropertyState."""

    def __init__(self, name: str = "web") -> None:
        self.name = name
        self.property_state = PropertyState()


@pytest.fixture(autouse=True)
def notices():
    """Collect deprecation notices for the duration of a test."""
    sink = CollectingSink()
    previous = set_deprecation_sink(sink)
    yield sink
    set_deprecation_sink(previous)


@pytest.fixture
def host():
    """Fresh resource context named "web"."""
    return Host("web")


@pytest.fixture
def host_cls():
    return Host
