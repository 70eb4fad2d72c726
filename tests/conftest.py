"""
Shared fixtures for the test suite.
"""

from typing import List

import pytest

from salonslots.domain.models import BusinessHours

from .helpers import weekly_hours


@pytest.fixture
def business_hours() -> List[BusinessHours]:
    return weekly_hours()
