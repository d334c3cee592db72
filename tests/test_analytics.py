from datetime import date, timedelta

from lightlog import analytics

TODAY = date(2026, 10, 16)


def days_ago(n):
    return TODAY - timedelta(days=n)


class TestStreaks:
    def test_no_entries(self):
        assert analytics.calculate_streaks([], TODAY) == (0, 0)

    def test_only_today(self):
        assert analytics.calculate_streaks([TODAY], TODAY) == (1, 1)

    def test_three_days_ending_today(self):
        dates = [TODAY, days_ago(1), days_ago(2)]
        assert analytics.calculate_streaks(dates, TODAY) == (3, 3)

    def test_old_run_does_not_count_as_current(self):
        dates = [days_ago(5), days_ago(4), days_ago(10)]
        assert analytics.calculate_streaks(dates, TODAY) == (2, 0)

    def test_single_entry_yesterday_keeps_streak_alive(self):
        assert analytics.calculate_streaks([days_ago(1)], TODAY) == (1, 1)

    def test_single_old_entry(self):
        assert analytics.calculate_streaks([days_ago(2)], TODAY) == (1, 0)

    def test_run_ending_yesterday(self):
        dates = [days_ago(1), days_ago(2), days_ago(3), days_ago(7)]
        assert analytics.calculate_streaks(dates, TODAY) == (3, 3)

    def test_duplicate_dates_are_counted_once(self):
        dates = [TODAY, TODAY, days_ago(1), days_ago(1)]
        assert analytics.calculate_streaks(dates, TODAY) == (2, 2)

    def test_current_streak_can_be_shorter_than_longest(self):
        dates = [days_ago(n) for n in range(10, 15)] + [TODAY]
        assert analytics.calculate_streaks(dates, TODAY) == (5, 1)

    def test_unordered_input(self):
        dates = [days_ago(2), TODAY, days_ago(1)]
        assert analytics.calculate_streaks(dates, TODAY) == (3, 3)


class TestMonthlyCounts:
    def test_always_twelve_buckets_oldest_first(self):
        stats = analytics.monthly_counts([], TODAY)
        assert len(stats) == 12
        assert stats[0]['month'] == '2025-11'
        assert stats[-1]['month'] == '2026-10'
        assert all(bucket['count'] == 0 for bucket in stats)

    def test_counts_every_entry_in_its_month(self):
        dates = [date(2026, 10, 1), date(2026, 10, 1), date(2026, 9, 30), date(2026, 1, 15)]
        counts = {b['month']: b['count'] for b in analytics.monthly_counts(dates, TODAY)}
        assert counts['2026-10'] == 2
        assert counts['2026-09'] == 1
        assert counts['2026-01'] == 1

    def test_entries_older_than_window_are_dropped(self):
        dates = [date(2025, 10, 31), date(2024, 6, 1)]
        stats = analytics.monthly_counts(dates, TODAY)
        assert sum(b['count'] for b in stats) == 0
        assert len(stats) == 12

    def test_first_day_of_oldest_month_is_included(self):
        stats = analytics.monthly_counts([date(2025, 11, 1)], TODAY)
        assert stats[0] == {'month': '2025-11', 'count': 1}

    def test_window_crosses_year_boundary(self):
        keys = analytics.trailing_month_keys(date(2026, 2, 3))
        assert keys[0] == '2025-03'
        assert keys[-2:] == ['2026-01', '2026-02']


class TestRecentDays:
    def test_thirty_days_oldest_first_ending_today(self):
        days = analytics.recent_days([], TODAY)
        assert len(days) == 30
        assert days[0]['date'] == days_ago(29).isoformat()
        assert days[-1]['date'] == TODAY.isoformat()

    def test_marks_days_with_entries(self):
        days = analytics.recent_days([TODAY, days_ago(3), days_ago(40)], TODAY)
        marked = [d['date'] for d in days if d['hasEntry']]
        assert marked == [days_ago(3).isoformat(), TODAY.isoformat()]


def test_count_in_month():
    dates = [date(2026, 10, 1), date(2026, 10, 16), date(2025, 10, 16)]
    assert analytics.count_in_month(dates, TODAY) == 2


def test_months_before_clamps_to_month_end():
    assert analytics.months_before(date(2026, 3, 31), 1) == date(2026, 2, 28)
    assert analytics.months_before(date(2026, 1, 15), 3) == date(2025, 10, 15)
    assert analytics.months_before(TODAY, 12) == date(2025, 10, 16)
