"""
Pytest fixtures for plan computation tests.
"""

import sys
from pathlib import Path

import pytest

# Add repository root and tests directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from helpers import make_plan
from zoneshift.types import Anchor, ManualEvent, Plan


@pytest.fixture
def base_plan() -> Plan:
    """LA -> Taipei plan with no anchors or events."""
    return make_plan()


@pytest.fixture
def sample_plan() -> Plan:
    """LA -> Taipei plan with a breakfast anchor and two manual events."""
    return make_plan(
        anchors=[
            Anchor(
                id="taipei-morning-market",
                instant="2024-10-21T01:00:00Z",
                zone="Asia/Taipei",
                note="Meet friends for breakfast",
            )
        ],
        events=[
            ManualEvent(
                id="flight-out",
                title="Flight to Taipei",
                start="2024-10-18T05:00:00Z",
                end="2024-10-18T17:30:00Z",
                zone="America/Los_Angeles",
                color_hint="peach",
            ),
            ManualEvent(
                id="check-in",
                title="Hotel Check-In",
                start="2024-10-19T14:00:00Z",
                end="2024-10-19T15:00:00Z",
                zone="Asia/Taipei",
                color_hint="peach",
            ),
        ],
    )
