"""Shared test fixtures.

Time is frozen at 2024-01-01T00:00:00Z (1_704_067_200_000 ms since the epoch).
"""
from datetime import datetime, timezone

import pytest

from s3_expiry.config import get_settings
from s3_expiry.time_utils import fixed_clock


@pytest.fixture
def frozen_now():
    return datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def frozen_now_ms():
    return 1_704_067_200_000


@pytest.fixture
def clock(frozen_now):
    return fixed_clock(frozen_now)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch, tmp_path):
    # keep a developer's .env out of the settings under test
    monkeypatch.chdir(tmp_path)
    for key in ("LOG_LEVEL", "DEFAULT_EXPIRATION", "S3_BUCKET", "S3_PUBLIC_URL"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
