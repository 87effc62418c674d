from datetime import date

import pytest

from core.state import Module, ShiftConfig
from planner.generator import generate

ASSUMPTION_DAY = date(2026, 8, 15)  # Saturday
START = date(2026, 7, 21)  # Tuesday


@pytest.fixture
def shift():
    return ShiftConfig(fixed_hours=5)


@pytest.fixture
def excluded():
    return frozenset({ASSUMPTION_DAY})


@pytest.fixture
def modules():
    return [
        Module(id="MF1", code="MF1330_1", hours_total=30),
        Module(id="MF2", code="MF1331_1", hours_total=60),
        Module(id="MF3", code="MF1332_1", hours_total=30),
    ]


@pytest.fixture
def plan(modules, shift, excluded):
    return generate(modules, START, shift, excluded)
