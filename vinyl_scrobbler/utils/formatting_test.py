from vinyl_scrobbler.utils.formatting import format_duration


def test_format_duration() -> None:
    assert format_duration(0) == "0:00"
    assert format_duration(59) == "0:59"
    assert format_duration(180) == "3:00"
    assert format_duration(462) == "7:42"
    assert format_duration(3723) == "1:02:03"
