import pytest
from pydantic import ValidationError

from assistant.config import Settings


def test_canonical_timezone_is_normalized():
    assert Settings(CANONICAL_TIMEZONE="europe/london").CANONICAL_TIMEZONE == "Europe/London"


def test_unknown_canonical_timezone_is_rejected():
    with pytest.raises(ValidationError):
        Settings(CANONICAL_TIMEZONE="Mars/Base")


def test_debug_forces_debug_log_level():
    assert Settings(debug=True, LOG_LEVEL="warning").get_log_level() == "DEBUG"
    assert Settings(debug=False, LOG_LEVEL="warning").get_log_level() == "WARNING"
