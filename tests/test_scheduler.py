"""Tests for the scheduled jobs."""

from datetime import date

import pytest

from conftest import TEST_EMAIL, make_plan
import scheduler
import store


@pytest.fixture
def streaky_user(db, user_data):
    """Two plans: one checked in on Jan 5, one on Jan 7."""
    store.create_user(db, user_data)
    a = store.add_plan(db, TEST_EMAIL, make_plan("A"))
    b = store.add_plan(db, TEST_EMAIL, make_plan("B"))
    store.apply_progress(db, TEST_EMAIL, a.plan_id, lambda s: s.check_in(date(2026, 1, 5)))
    store.apply_progress(db, TEST_EMAIL, b.plan_id, lambda s: s.check_in(date(2026, 1, 7)))
    return a, b


class TestStreakSweep:
    def test_resets_only_broken_streaks(self, db, streaky_user):
        a, b = streaky_user
        assert scheduler.streak_sweep(date(2026, 1, 8)) == 1

        doc = store.get_user(db, TEST_EMAIL).document
        assert store.find_plan(doc, a.plan_id).current_streak == 0
        assert store.find_plan(doc, b.plan_id).current_streak == 1
        assert doc.global_current_streak == 1
        assert doc.global_longest_streak == 1

    def test_second_sweep_changes_nothing(self, db, streaky_user):
        scheduler.streak_sweep(date(2026, 1, 8))
        version = store.get_user(db, TEST_EMAIL).version
        assert scheduler.streak_sweep(date(2026, 1, 8)) == 0
        assert store.get_user(db, TEST_EMAIL).version == version

    def test_archived_plans_skipped(self, db, streaky_user):
        a, _ = streaky_user
        store.archive_plan(db, TEST_EMAIL, a.plan_id)
        assert scheduler.streak_sweep(date(2026, 1, 8)) == 0


class TestSchedulerSetup:
    def test_jobs_registered(self):
        sched = scheduler.create_scheduler()
        assert {job.id for job in sched.get_jobs()} == {"daily_reminder", "streak_sweep"}

    def test_local_today_unknown_timezone(self):
        assert isinstance(scheduler.local_today("Mars/Olympus"), date)
