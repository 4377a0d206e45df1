"""Test settings normalization."""

import pytest

from timeledger.config import Settings


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("postgres://u:p@db:5432/tl", "postgresql+asyncpg://u:p@db:5432/tl"),
        ("postgresql://u:p@db:5432/tl", "postgresql+asyncpg://u:p@db:5432/tl"),
        ("postgresql+asyncpg://u:p@db:5432/tl", "postgresql+asyncpg://u:p@db:5432/tl"),
        ('"sqlite:///local.db"', "sqlite+aiosqlite:///local.db"),
        ("sqlite+aiosqlite:///local.db", "sqlite+aiosqlite:///local.db"),
    ],
)
def test_database_url_is_normalized(raw, expected):
    assert Settings(database_url=raw).database_url == expected


def test_defaults():
    config = Settings()
    assert config.logging_gate_hours == 4.0
    assert config.hackatime_base_url.endswith("/api/v1")
    assert config.provider_concurrency >= 1
