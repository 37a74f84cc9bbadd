import datetime as dt

from core.formatting import avatar_url, format_date, format_file_size, parse_timestamp, time_ago, user_initials

NOW = dt.datetime(2025, 6, 1, 12, 0, tzinfo=dt.timezone.utc)


def ago(**delta):
    return (NOW - dt.timedelta(**delta)).isoformat()


def test_time_ago_buckets():
    assert time_ago(ago(hours=3), now=NOW) == "Today"
    assert time_ago(ago(hours=24), now=NOW) == "Yesterday"
    assert time_ago(ago(days=3), now=NOW) == "3 days ago"
    assert time_ago(ago(days=8), now=NOW) == "1 weeks ago"
    assert time_ago(ago(days=45), now=NOW) == "1 months ago"
    assert time_ago(ago(days=400), now=NOW) == "1 years ago"


def test_time_ago_unparseable():
    assert time_ago("not-a-date", now=NOW) == "Unknown"
    assert time_ago(None, now=NOW) == "Unknown"


def test_parse_timestamp_accepts_zulu_and_naive():
    assert parse_timestamp("2025-01-01T00:00:00Z") == dt.datetime(2025, 1, 1, tzinfo=dt.timezone.utc)
    assert parse_timestamp("2025-01-01T00:00:00").tzinfo is not None
    assert parse_timestamp("garbage") is None


def test_format_helpers():
    assert format_date("2025-03-04T10:00:00+00:00") == "2025-03-04"
    assert format_date("") == "—"
    assert format_file_size(500) == "500 B"
    assert format_file_size(2048) == "2.0 KB"
    assert format_file_size(5 * 1024 * 1024) == "5.0 MB"
    assert user_initials("jane.doe@example.com") == "JA"
    assert user_initials(None) == "U"
    assert "name=Jane%20Doe" in avatar_url("Jane Doe")


def test_time_ago_future_is_today():
    assert time_ago((NOW + dt.timedelta(hours=5)).isoformat(), now=NOW) == "Today"
