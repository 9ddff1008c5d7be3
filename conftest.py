from datetime import datetime

import pytest


@pytest.fixture
def fixed_now():
    return datetime(2026, 1, 5, 8, 30, 0)
