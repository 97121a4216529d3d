import pytest

from vinyl_scrobbler.core.timeline import schedule_timestamps


def test_two_short_tracks() -> None:
    assert schedule_timestamps([30, 30], now=1000) == [940, 970]


def test_session_ending_now() -> None:
    assert schedule_timestamps([180, 240], now=10000) == [9580, 9760]


def test_empty_tracklist() -> None:
    assert schedule_timestamps([], now=1000) == []


def test_single_track_starts_its_duration_ago() -> None:
    assert schedule_timestamps([200], now=5000) == [4800]


def test_timestamps_strictly_increase_and_never_pass_now() -> None:
    durations = [77, 383, 180, 30, 412, 95]
    now = 1_700_000_000
    timestamps = schedule_timestamps(durations, now)

    assert len(timestamps) == len(durations)
    assert all(a < b for a, b in zip(timestamps, timestamps[1:]))
    assert all(ts <= now for ts in timestamps)
    # Each track starts exactly when the previous one ended.
    assert [b - a for a, b in zip(timestamps, timestamps[1:])] == durations[:-1]
    assert timestamps[-1] + durations[-1] == now
    assert timestamps[0] == now - sum(durations)


def test_rejects_non_positive_durations() -> None:
    with pytest.raises(ValueError):
        schedule_timestamps([180, 0], now=1000)
