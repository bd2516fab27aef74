"""Shared test fixtures for fuzzy-select."""

import pytest

from fuzzy_select.services.config import SelectConfig, identity_transform
from fuzzy_select.services.events import EventBus
from fuzzy_select.services.navigation import SelectionMachine


@pytest.fixture
def fruits() -> list[str]:
    """Small candidate list used across tests."""
    return ["Apple", "Banana", "Grape"]


@pytest.fixture
def a_fruits() -> list[str]:
    """Three candidates that all match "a", ranked in list order."""
    return ["Apple", "Apricot", "Avocado"]


@pytest.fixture
def config() -> SelectConfig:
    """Config that searches every query, including empty ones."""
    return SelectConfig(transform_query=identity_transform)


@pytest.fixture
def bus() -> EventBus:
    """Fresh event bus for each test."""
    return EventBus()


@pytest.fixture
def machine(config: SelectConfig, a_fruits: list[str], bus: EventBus) -> SelectionMachine:
    """Single-select machine over a_fruits."""
    return SelectionMachine(config, a_fruits, events=bus)


@pytest.fixture
def multi_machine(config: SelectConfig, a_fruits: list[str], bus: EventBus) -> SelectionMachine:
    """Multi-select machine over a_fruits."""
    return SelectionMachine(config.with_options(multi=True), a_fruits, events=bus)
