"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at a temporary location for every test."""
    config_home = tmp_path / "config-home"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "rdsjanitor"


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for staleness and event window tests."""
    return datetime(2025, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def mock_quser_output() -> str:
    """Sample quser output with active, disconnected and idle sessions."""
    return """ USERNAME              SESSIONNAME        ID  STATE   IDLE TIME  LOGON TIME
>alice                 console             1  Active      none   1/15/2025 9:02 AM
 bob                                       2  Disc          3:12 1/15/2025 8:10 AM
 carol                 rdp-tcp#3           4  Idle           12  1/15/2025 9:30 AM
"""


@pytest.fixture
def mock_quser_disconnected_output() -> str:
    """Sample quser output where several sessions are disconnected."""
    return """ USERNAME              SESSIONNAME        ID  STATE   IDLE TIME  LOGON TIME
 bob                                       3  Disc          1:05 1/15/2025 7:45 AM
 carol                                     4  Disc          2:40 1/15/2025 6:30 AM
 dave                  rdp-tcp#7           5  Active      none   1/15/2025 9:12 AM
"""


@pytest.fixture
def mock_malformed_quser_output() -> str:
    """quser output containing lines that cannot be parsed."""
    return """ USERNAME              SESSIONNAME        ID  STATE   IDLE TIME  LOGON TIME
>alice                 console             1  Active      none   1/15/2025 9:02 AM
 garbage
 eve                   rdp-tcp#9          abc  Active      none   1/15/2025 9:40 AM
"""


@pytest.fixture
def mock_profile_records() -> list[dict[str, Any]]:
    """Decoded Win32_UserProfile records as emitted by the profile query."""
    return [
        {
            "LocalPath": "C:\\Users\\local_alice",
            "Loaded": False,
            "Special": False,
            "SID": "S-1-5-21-1000-1001",
            "LastUseTime": "2025-01-10T08:00:00Z",
        },
        {
            "LocalPath": "C:\\Users\\local_bob",
            "Loaded": True,
            "Special": False,
            "SID": "S-1-5-21-1000-1002",
            "LastUseTime": "2025-01-05T08:00:00Z",
        },
        {
            "LocalPath": "C:\\Users\\carol",
            "Loaded": False,
            "Special": False,
            "SID": "S-1-5-21-1000-1003",
            "LastUseTime": "2024-12-01T08:00:00Z",
        },
        {
            "LocalPath": "C:\\Users\\local_dave",
            "Loaded": False,
            "Special": False,
            "SID": "S-1-5-21-1000-1004",
            "LastUseTime": None,
        },
    ]
