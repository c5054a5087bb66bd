from arena.utils.rate_limiter import RateLimiter
from arena.utils.sanitize import (
    sanitize_input,
    validate_character_input,
    validate_prompt,
    validate_world_input,
)


def test_sanitize_strips_markup_and_handlers():
    assert sanitize_input("<b>slash</b>") == "bslash/b"
    assert sanitize_input("javascript:alert(1)") == "alert(1)"
    assert sanitize_input('kick onclick="x" hard') == 'kick "x" hard'
    assert sanitize_input("   spaced out   ") == "spaced out"


def test_sanitize_caps_length_before_trimming():
    assert sanitize_input("abcdef", max_length=3) == "abc"
    assert len(sanitize_input("x" * 900)) == 500


def test_validators():
    assert validate_prompt("").valid is False
    assert validate_prompt("   ").error == "Action cannot be empty"
    assert validate_prompt("hi").error == "Must be at least 3 characters"
    assert validate_prompt("x" * 501).error == "Max 500 characters"
    assert validate_prompt("punch").valid is True

    assert validate_character_input("").error == "Character description is required"
    assert validate_character_input("x" * 201).valid is False
    assert validate_world_input("").error == "World description is required"
    assert validate_world_input("A floating palace").valid is True


class _Clock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_rate_limiter_sliding_window():
    clock = _Clock()
    limiter = RateLimiter(max_requests=2, window_seconds=60, clock=clock)
    assert limiter.remaining() == 2

    limiter.record_request()
    clock.now += 10
    limiter.record_request()
    assert limiter.can_make_request() is False
    assert limiter.remaining() == 0
    assert limiter.get_wait_time() == 50

    clock.now += 51
    assert limiter.can_make_request() is True
    assert limiter.remaining() == 1
    assert limiter.get_wait_time() == 0.0


def test_rate_limiter_reset():
    limiter = RateLimiter(max_requests=1, window_seconds=60, clock=_Clock())
    limiter.record_request()
    assert limiter.can_make_request() is False
    limiter.reset()
    assert limiter.can_make_request() is True


def test_rate_limiter_with_zero_budget_reports_full_window():
    limiter = RateLimiter(max_requests=0, window_seconds=60, clock=_Clock())
    assert limiter.can_make_request() is False
    assert limiter.remaining() == 0
    assert limiter.get_wait_time() == 60.0
