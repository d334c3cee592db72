"""
Writing-habit analytics derived from a user's entry dates.

All functions are pure: they take the entry dates and an explicit
``today`` so results are deterministic for a fixed clock.
"""
import calendar
from datetime import timedelta

MONTH_WINDOW = 12
RECENT_DAY_WINDOW = 30


def calculate_streaks(dates, today):
    """Return ``(longest_streak, current_streak)`` in consecutive days.

    The current streak counts back from today, or from yesterday when
    today has no entry yet; if neither day has an entry it is 0.
    """
    written = set(dates)
    if not written:
        return 0, 0

    ordered = sorted(written)
    longest = run = 1
    for previous, day in zip(ordered, ordered[1:]):
        run = run + 1 if day == previous + timedelta(days=1) else 1
        longest = max(longest, run)

    yesterday = today - timedelta(days=1)
    if today in written:
        day = today
    elif yesterday in written:
        day = yesterday
    else:
        return longest, 0

    current = 0
    while day in written:
        current += 1
        day -= timedelta(days=1)

    return longest, current


def month_key(day):
    return day.strftime('%Y-%m')


def trailing_month_keys(today, months=MONTH_WINDOW):
    """Year-month keys for the trailing window, oldest first, ending at today's month."""
    keys = []
    year, month = today.year, today.month
    for _ in range(months):
        keys.append(f'{year:04d}-{month:02d}')
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


def monthly_counts(dates, today):
    """Entry counts per month for the trailing twelve months; older entries are dropped."""
    buckets = dict.fromkeys(trailing_month_keys(today), 0)
    for day in dates:
        key = month_key(day)
        if key in buckets:
            buckets[key] += 1
    return [{'month': key, 'count': count} for key, count in sorted(buckets.items())]


def recent_days(dates, today, days=RECENT_DAY_WINDOW):
    """One marker per day for the last thirty days including today, oldest first."""
    written = set(dates)
    markers = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        markers.append({'date': day.isoformat(), 'hasEntry': day in written})
    return markers


def count_in_month(dates, today):
    return sum(1 for day in dates if day.year == today.year and day.month == today.month)


def months_before(day, months):
    """Same day of month ``months`` earlier, clamped to the end of shorter months."""
    total = day.year * 12 + (day.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    return day.replace(year=year, month=month, day=min(day.day, calendar.monthrange(year, month)[1]))
