import pytest

from repeatloop.core.time_format import format_repeat_count, seconds_to_time, time_to_seconds


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0, "0:00"),
        (59.9, "0:59"),
        (90, "1:30"),
        (3723, "1:02:03"),
        (-4, "0:00"),
        (float("nan"), "0:00"),
    ],
)
def test_seconds_to_time(seconds, expected):
    assert seconds_to_time(seconds) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", 0.0),
        ("  42 ", 42.0),
        ("12.5", 12.5),
        ("1:30", 90.0),
        ("1:02:03", 3723.0),
        ("abc", 0.0),
        ("1:x:30", 90.0),
    ],
)
def test_time_to_seconds(text, expected):
    assert time_to_seconds(text) == expected


def test_format_repeat_count():
    assert format_repeat_count(0) == "∞"
    assert format_repeat_count(3) == "3x"
