"""Pytest configuration and shared fixtures."""
from typing import Any, Dict

import pytest

from jobfeed.infrastructure.store.entity_store import EntityStore

from tests.factories import JOB_ID, FakeClock, make_message


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable clock."""
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> EntityStore:
    """Provide an empty store driven by the fake clock."""
    return EntityStore(clock=clock)


@pytest.fixture
def sample_notifier_message() -> Dict[str, Any]:
    """Provide a fully populated notifier message."""
    return make_message(
        "1200000000000000001",
        fields=[
            {"name": "🏷️ Name", "value": "Alpha"},
            {"name": "💰 Money / Sec", "value": "**$4.5M/s**"},
            {"name": "👥 Players", "value": "**7/8**"},
            {"name": "🆔 Job ID (PC)", "value": f"```{JOB_ID}```"},
        ],
        title="Brainrot Notify",
    )
