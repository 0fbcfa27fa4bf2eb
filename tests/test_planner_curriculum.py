"""Tests for curriculum matching and plan assembly."""

from datetime import date

from curriculum import flatten_tasks, match_curriculum, monthly_themes, task_type_by_index
from calendar_gen import generate_dates
from planner import (
    assign_tasks, base_points, build_ai_plan, build_template_plan, fill_monthly_themes,
    leetcode_config, minutes_for_commitment, pattern_task, schedule_for
)
from schemas import GoalInput, ScheduleType, TaskType


# ─────────────────────────────────────────────────────────────────────────────
# Curriculum
# ─────────────────────────────────────────────────────────────────────────────


class TestMatchCurriculum:
    def test_backend_keyword_wins(self):
        assert match_curriculum("Build REST APIs with Django", "Python") == "backend"

    def test_category_name(self):
        assert match_curriculum("Get better at coding", "JavaScript") == "javascript"

    def test_default(self):
        assert match_curriculum("Learn to juggle", "Hobbies") == "python"


class TestFlatten:
    def test_types_by_position(self):
        assert task_type_by_index(0) == "learn"
        assert task_type_by_index(8) == "practice"
        assert task_type_by_index(16) == "build"

    def test_flat_list_in_order(self):
        flat = flatten_tasks("python")
        assert flat[0]["title"] == "Learn Python variables and naming conventions"
        assert flat[0]["theme_month"] == 1
        assert "Python Fundamentals" in flat[0]["description"]

    def test_twelve_themes(self):
        themes = monthly_themes("python")
        assert len(themes) == 12
        assert themes[0]["month"] == 1


# ─────────────────────────────────────────────────────────────────────────────
# Rules
# ─────────────────────────────────────────────────────────────────────────────


class TestRules:
    def test_minutes(self):
        assert minutes_for_commitment("2hr-daily") == 120
        assert minutes_for_commitment("whenever") == 60

    def test_points(self):
        assert base_points(30) == 15
        assert base_points(60) == 20
        assert base_points(180) == 30

    def test_leetcode_difficulty_rises(self):
        assert leetcode_config(1)["difficulty"] == "easy"
        assert leetcode_config(4)["difficulty"] == "medium"
        assert leetcode_config(9)["difficulty"] == "hard"

    def test_schedule_for_year(self):
        goal = GoalInput(primary_goal="Learn Python", year=2026)
        assert len(schedule_for(goal)) == 261


# ─────────────────────────────────────────────────────────────────────────────
# Template Plans
# ─────────────────────────────────────────────────────────────────────────────


class TestTemplatePlan:
    """Plans built from the static curriculum."""

    def test_one_task_per_day(self, goal):
        plan = build_template_plan(goal)
        assert len(plan.daily_tasks) == 10
        assert plan.total_days == 10
        assert plan.start_date == "2026-01-05"
        assert plan.end_date == "2026-01-16"
        assert plan.daily_tasks[0].title == "Learn Python variables and naming conventions"

    def test_task_ids_and_points(self, goal):
        plan = build_template_plan(goal)
        first = plan.daily_tasks[0]
        assert first.task_id == f"task-{plan.plan_id}-1"
        assert first.points == 20
        assert first.estimated_minutes == 60
        assert first.resources

    def test_twelve_themes_and_icon(self, goal):
        plan = build_template_plan(goal)
        assert len(plan.monthly_themes) == 12
        assert plan.plan_icon == "💻"
        assert plan.plan_title == "Python Mastery"

    def test_leetcode_tasks(self, goal):
        goal = goal.model_copy(update={"include_leet_code": True, "leet_code_language": "python"})
        plan = build_template_plan(goal)
        leetcode = [t for t in plan.daily_tasks if t.is_leet_code]
        assert len(leetcode) == 10
        assert leetcode[0].task_id.endswith("-lc")
        assert leetcode[0].points == 10
        assert plan.leet_code_language == "python"


class TestShortCurriculum:
    """More scheduled days than tasks: assignment stops with the task list."""

    def test_later_days_get_no_task(self):
        days = generate_dates(ScheduleType.fullweek, date(2026, 1, 5), 10)
        tasks = [{"title": f"Topic {i}", "type": "learn"} for i in range(1, 4)]

        daily = assign_tasks(days, tasks, "short")

        assert len(daily) == len(tasks)
        assert [t.date for t in daily] == ["2026-01-05", "2026-01-06", "2026-01-07"]

    def test_full_year_longer_than_curriculum(self):
        goal = GoalInput(category_name="Python", primary_goal="Learn Python", schedule_type="fullweek",
                         start_date=date(2026, 1, 1), total_days=365)
        tasks = flatten_tasks(match_curriculum(goal.primary_goal, goal.category_name))
        assert len(tasks) < 365

        plan = build_template_plan(goal)

        assert len(plan.daily_tasks) == len(tasks)
        last_day = max(t.date for t in plan.daily_tasks)
        assert last_day < schedule_for(goal)[-1].date.isoformat()


# ─────────────────────────────────────────────────────────────────────────────
# AI Plans
# ─────────────────────────────────────────────────────────────────────────────

OUTLINE = {
    "title": "Automation with Python",
    "description": "Scripts that save time",
    "monthlyThemes": [{"month": 1, "theme": "Basics", "focus": "Syntax", "topics": ["Files", "Loops"]}],
    "taskPatterns": [
        {"month": 1, "tasks": [{"title": "Write a file renamer", "description": "Rename files", "type": "practice"}]},
    ],
}


class TestAIPlan:
    """Plans expanded from an AI outline."""

    def test_every_day_covered(self, goal):
        plan = build_ai_plan(goal, OUTLINE)
        assert len(plan.daily_tasks) == 10
        assert plan.plan_title == "Automation with Python"
        assert plan.daily_tasks[0].title == "Write a file renamer"
        assert plan.daily_tasks[0].type == TaskType.practice

    def test_generated_tasks_use_theme_topics(self, goal):
        plan = build_ai_plan(goal, OUTLINE)
        second = plan.daily_tasks[1]
        assert "Loops" in second.title or "Files" in second.title
        assert "Basics" in second.description

    def test_pattern_task_rotation(self):
        themes = fill_monthly_themes([])
        task = pattern_task([], 0, 1, themes[0])
        assert task["topic"] == "Core Concepts"
        assert task["type"] == TaskType.learn

    def test_start_date_defaults(self):
        goal = GoalInput(primary_goal="Learn Python", total_days=5, start_date=date(2026, 6, 1))
        plan = build_ai_plan(goal, OUTLINE)
        assert plan.start_date == "2026-06-01"
