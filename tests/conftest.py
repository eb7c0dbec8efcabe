"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog

from srtedit.utils.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the get_settings LRU cache before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore the default structlog configuration after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def sample_srt_content() -> str:
    """Return SRT content with an empty cue, a tombstone and no final newline."""
    return """1
0:02:21,860 --> 0:02:24,520

3
0:02:24,520 --> 0:02:27,400
The only four combinations.
0+0 = 0

-1
0:02:24,520 --> 0:02:27,400

7
0:02:24,520 --> 0:02:27,400"""


@pytest.fixture
def timeline_srt_content() -> str:
    """Return ten-second cues starting at 0, 10, 30, 50 and 60 seconds."""
    return """1
0:00:00,000 --> 0:00:10,000
one

2
0:00:10,000 --> 0:00:20,000
two

3
0:00:30,000 --> 0:00:40,000
three

4
0:00:50,000 --> 0:01:00,000
four

5
0:01:00,000 --> 0:01:10,000
five
"""


@pytest.fixture
def write_srt(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes SRT content to a temporary file."""

    def _write(content: str, name: str = "input.srt") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
