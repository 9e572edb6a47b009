"""Root conftest - shared test configuration.

Invariants:
    - Settings never read a developer's real .env or KEYGATE_* overrides
    - get_settings() cache cleared around every test
"""

import os

import pytest

from keygate.config import get_settings

for _name in list(os.environ):
    if _name.startswith("KEYGATE_"):
        del os.environ[_name]


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
