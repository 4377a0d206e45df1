"""Test timeline rows built from an attribution."""

from timeledger.pipeline.attribution import attribute
from timeledger.pipeline.timeline import (
    build_timeline,
    format_hours,
    release_label,
    seconds_to_hours,
)
from timeledger.sources.base import CheckpointEvent, CheckpointKind, TimeSpan

HOUR = 3600


def span(end: float, dur: float) -> TimeSpan:
    return TimeSpan(source_project="p", end_time=end, duration_seconds=dur)


def checkpoint(t: float, kind: CheckpointKind) -> CheckpointEvent:
    return CheckpointEvent(id=f"{kind.value}:{t}", kind=kind, occurred_at=t)


def test_release_labels_count_from_one_point_zero():
    assert release_label(0) == "Release 1.0"
    assert release_label(3) == "Release 1.3"


def test_hours_formatting():
    assert format_hours(5400) == "1.50"
    assert format_hours(0) == "0.00"
    assert seconds_to_hours(5400) == 1.5
    assert seconds_to_hours(1234, ndigits=2) == 0.34


def test_rows_per_checkpoint_with_releases_numbered():
    result = attribute(
        [span(100, 2 * HOUR), span(300, HOUR), span(500, HOUR / 2)],
        [
            checkpoint(200, CheckpointKind.SHIP_RELEASE),
            checkpoint(400, CheckpointKind.DEVLOG),
            checkpoint(600, CheckpointKind.SHIP_RELEASE),
        ],
    )
    rows = build_timeline(result)

    assert [r.label for r in rows] == ["Release 1.0", "Devlog", "Release 1.1"]
    assert [r.hours_since_previous for r in rows] == [2.0, 1.0, 0.5]
    assert [r.cumulative_hours for r in rows] == [2.0, 3.0, 3.5]
    assert rows[0].checkpoint_id == "ship:200"


def test_unposted_row_only_when_trailing_positive():
    quiet = build_timeline(attribute([span(100, HOUR)], [checkpoint(200, CheckpointKind.DEVLOG)]))
    assert [r.label for r in quiet] == ["Devlog"]

    busy = build_timeline(attribute([span(300, HOUR)], [checkpoint(200, CheckpointKind.DEVLOG)]))
    assert busy[-1].label == "Unposted"
    assert busy[-1].kind is None
    assert busy[-1].hours_since_previous == 1.0
    assert busy[-1].cumulative_hours == 1.0


def test_timeline_occurred_at_is_utc():
    rows = build_timeline(attribute([], [checkpoint(0, CheckpointKind.DEVLOG)]))
    assert rows[0].occurred_at.isoformat() == "1970-01-01T00:00:00+00:00"
