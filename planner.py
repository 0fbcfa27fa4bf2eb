"""
=============================================================================
PLANNER.PY — Motor de Asignación de Tareas
=============================================================================
Une el calendario (calendar_gen) con una lista de tareas para producir
el plan diario completo.

Dos fuentes de tareas:
  1. PLANTILLA → currículum estático (curriculum.py), una tarea por día
     en orden. Si hay menos tareas que días, los últimos días quedan
     sin tarea.
  2. IA → la IA devuelve 5-6 tareas de ejemplo por mes (taskPatterns)
     y aquí se expanden rotando acciones hasta cubrir cada día del mes.

Reglas de puntos y minutos:
  - Minutos → según el compromiso diario ("1hr-daily" → 60)
  - Puntos  → ≥120 min: 30 | ≥60 min: 20 | menos: 15
  - LeetCode (opcional) → tarea extra el mismo día, dificultad según mes
"""

import logging
import uuid
from datetime import date, timedelta
from itertools import groupby
from typing import Optional

from calendar_gen import generate_dates, generate_year_schedule
from curriculum import CURRICULA, flatten_tasks, match_curriculum, monthly_themes
from resources import task_resources
from schemas import (
    DailyTask, GoalInput, MonthlyTheme, PlanCreate, PLAN_CATEGORIES,
    ScheduledDay, TaskResource, TaskType
)

logger = logging.getLogger("lockin.planner")

# ─────────────────────────────────────────────────────────────────────────────
# TABLAS DE REGLAS
# ─────────────────────────────────────────────────────────────────────────────

COMMITMENT_MINUTES = {
    "30min-daily": 30,
    "1hr-daily": 60,
    "2hr-daily": 120,
    "3hr-daily": 180,
}
DEFAULT_MINUTES = 60

# Acciones para inventar tareas cuando la IA da menos que días del mes
PATTERN_ACTIONS = [
    ("Master", "through hands-on practice"),
    ("Implement", "from scratch"),
    ("Debug and optimize", "code"),
    ("Create a project using", ""),
    ("Review and document", "learnings"),
    ("Explore advanced", "techniques"),
    ("Build a mini-app with", ""),
    ("Practice", "with real examples"),
    ("Solve challenges using", ""),
    ("Write tests for", "code"),
]

DEFAULT_TOPICS = ["Core Concepts", "Fundamentals", "Practice", "Application", "Review"]

TASK_TYPES = {t.value for t in TaskType}


def minutes_for_commitment(time_commitment: str) -> int:
    return COMMITMENT_MINUTES.get(time_commitment, DEFAULT_MINUTES)


def base_points(daily_minutes: int) -> int:
    """Más tiempo diario → más puntos por tarea"""
    if daily_minutes >= 120:
        return 30
    if daily_minutes >= 60:
        return 20
    return 15


def leetcode_config(month: int) -> dict:
    """La dificultad del reto diario sube a lo largo del año"""
    if month > 8:
        return {"difficulty": "hard", "minutes": 45, "points": 30}
    if month > 3:
        return {"difficulty": "medium", "minutes": 30, "points": 20}
    return {"difficulty": "easy", "minutes": 20, "points": 10}


def task_type_by_month(month: int) -> TaskType:
    if month <= 4:
        return TaskType.learn
    if month <= 8:
        return TaskType.practice
    if month <= 11:
        return TaskType.build
    return TaskType.review


def new_plan_id() -> str:
    return str(uuid.uuid4())


# =============================================================================
# ===================== CALENDARIO DEL PLAN ===================================
# =============================================================================

def schedule_for(goal: GoalInput) -> list[ScheduledDay]:
    """
    - year → el año natural completo
    - start_date / total_days → ventana personalizada
    - nada → 365 días a partir de mañana
    """
    if goal.year and not goal.start_date and not goal.total_days:
        return generate_year_schedule(goal.year, goal.schedule_type)
    return generate_dates(goal.schedule_type, goal.start_date, goal.total_days)


def leetcode_task(plan_id: str, counter: int, day: ScheduledDay, language: Optional[str]) -> DailyTask:
    config = leetcode_config(day.month)
    language_part = f" in {language}" if language else ""
    return DailyTask(
        task_id=f"task-{plan_id}-{counter}-lc",
        day=counter,
        date=day.date.isoformat(),
        title=f"LeetCode Daily Challenge ({config['difficulty']})",
        description=(
            f"Complete LeetCode's Daily Challenge{language_part}. Open this task to view the problem, "
            "submit your solution, and analyze time/space complexity."
        ),
        type=TaskType.practice,
        estimated_minutes=config["minutes"],
        points=config["points"],
        month=day.month,
        week=day.week,
        is_leet_code=True,
        tags=["leetcode", config["difficulty"]],
    )


# =============================================================================
# ===================== ASIGNACIÓN (PLANTILLA) ================================
# =============================================================================

def assign_tasks(
    days: list[ScheduledDay],
    tasks: list[dict],
    plan_id: str,
    time_commitment: str = "1hr-daily",
    category: str = "",
    experience_level: str = "beginner",
    include_leet_code: bool = False,
    leet_code_language: Optional[str] = None,
) -> list[DailyTask]:
    """
    Asigna tasks[i] al día days[i].

    Se detiene en cuanto se acaba cualquiera de las dos listas:
    los días sobrantes quedan sin tarea.
    """
    minutes = minutes_for_commitment(time_commitment)
    points = base_points(minutes)
    daily = []

    for counter, (day, task) in enumerate(zip(days, tasks), start=1):
        task_type = task.get("type") or TaskType.learn
        daily.append(DailyTask(
            task_id=f"task-{plan_id}-{counter}",
            day=counter,
            date=day.date.isoformat(),
            title=task["title"],
            description=task.get("description", ""),
            type=task_type,
            estimated_minutes=minutes,
            points=points,
            month=day.month,
            week=day.week,
            resources=task_resources(task["title"], TaskType(task_type).value, category, experience_level),
        ))
        if include_leet_code:
            daily.append(leetcode_task(plan_id, counter, day, leet_code_language))

    if len(tasks) < len(days):
        logger.info(f"📭 Plan {plan_id}: {len(days) - len(tasks)} días sin tarea (currículum más corto)")
    return daily


# =============================================================================
# ===================== EXPANSIÓN (IA) ========================================
# =============================================================================

def pattern_task(pattern_tasks: list[dict], index: int, month: int, theme: Optional[MonthlyTheme]) -> dict:
    """
    Tarea nº index del mes. Si la IA dio suficientes, se usa la suya;
    si no, se genera rotando acción + subtema del mes.
    """
    if index < len(pattern_tasks):
        return pattern_tasks[index]

    topics = (theme.topics if theme and theme.topics else DEFAULT_TOPICS)
    topic = topics[index % len(topics)]
    verb, suffix = PATTERN_ACTIONS[(index + month) % len(PATTERN_ACTIONS)]
    theme_text = theme.theme if theme else f"Month {month} Focus"

    return {
        "title": f"{verb} {topic} {suffix}".strip(),
        "description": (
            f"Day {index + 1}: Focus on {topic} as part of {theme_text}. "
            "Complete this task to build practical skills."
        ),
        "type": task_type_by_month(month),
        "topic": topic,
    }


def _ai_resources(raw: list, level: str) -> list[TaskResource]:
    """Recursos que propone la IA, solo los que tienen URL http(s)"""
    resources = []
    for r in raw or []:
        url = (r or {}).get("url") or ""
        if not isinstance(url, str) or not url.startswith("http"):
            continue
        resources.append(TaskResource(
            type=r.get("type") or "article",
            title=r.get("name") or r.get("title") or "Resource",
            url=url,
            source=url.split("/")[2].removeprefix("www.") if url.count("/") >= 2 else "Web",
            difficulty=level,
            is_free=True,
        ))
    return resources[:3]


def expand_task_patterns(
    days: list[ScheduledDay],
    patterns: list[dict],
    themes: list[MonthlyTheme],
    plan_id: str,
    time_commitment: str = "1hr-daily",
    category: str = "",
    experience_level: str = "beginner",
    include_leet_code: bool = False,
    leet_code_language: Optional[str] = None,
) -> list[DailyTask]:
    """
    Cubre TODOS los días con tareas. El mes nº N del plan usa el
    taskPattern con month == N (el primer mes del plan es el 1,
    empiece cuando empiece).
    """
    minutes = minutes_for_commitment(time_commitment)
    points = base_points(minutes)
    patterns_by_month = {p.get("month"): p.get("tasks") or [] for p in patterns}
    themes_by_month = {t.month: t for t in themes}

    daily = []
    counter = 0
    month_runs = groupby(days, key=lambda d: (d.date.year, d.date.month))
    for plan_month, (_, run) in enumerate(month_runs, start=1):
        plan_month = min(plan_month, 12)
        pattern_tasks = patterns_by_month.get(plan_month, [])
        theme = themes_by_month.get(plan_month)

        for index, day in enumerate(run):
            counter += 1
            task = pattern_task(pattern_tasks, index, plan_month, theme)
            task_type = TaskType(task["type"]) if task.get("type") in TASK_TYPES else TaskType.learn
            resources = _ai_resources(task.get("resources"), experience_level) or task_resources(
                task.get("title", ""), task_type.value, category, experience_level
            )
            daily.append(DailyTask(
                task_id=f"task-{plan_id}-{counter}",
                day=counter,
                date=day.date.isoformat(),
                title=task.get("title") or f"Month {plan_month} task",
                description=task.get("description") or "",
                type=task_type,
                estimated_minutes=minutes,
                points=points,
                month=day.month,
                week=day.week,
                resources=resources,
            ))
            if include_leet_code:
                daily.append(leetcode_task(plan_id, counter, day, leet_code_language))

    return daily


def fill_monthly_themes(themes: list) -> list[MonthlyTheme]:
    """Siempre 12 temas ordenados; los meses que faltan llevan un genérico"""
    parsed = [t if isinstance(t, MonthlyTheme) else MonthlyTheme.model_validate(t) for t in themes or []]
    by_month = {t.month: t for t in parsed if 1 <= t.month <= 12}
    for m in range(1, 13):
        if m not in by_month:
            by_month[m] = MonthlyTheme(month=m, theme=f"Month {m} Focus", focus=f"Core concepts for month {m}")
    return [by_month[m] for m in range(1, 13)]


# =============================================================================
# ===================== PLANES COMPLETOS ======================================
# =============================================================================

def _draft(goal: GoalInput, plan_id: str, days: list[ScheduledDay], daily: list[DailyTask],
           themes: list[MonthlyTheme], title: str, description: str) -> PlanCreate:
    category = goal.category if goal.category in PLAN_CATEGORIES else "custom"
    start = days[0].date if days else (goal.start_date or date.today() + timedelta(days=1))
    end = days[-1].date if days else start
    return PlanCreate(
        plan_id=plan_id,
        plan_title=title,
        plan_description=description,
        plan_category=category,
        plan_icon=PLAN_CATEGORIES[category]["icon"],
        start_date=start.isoformat(),
        end_date=end.isoformat(),
        total_days=len(days),
        schedule_type=goal.schedule_type,
        time_commitment=goal.time_commitment,
        experience_level=goal.experience_level,
        include_leet_code=goal.include_leet_code,
        leet_code_language=goal.leet_code_language if goal.include_leet_code else None,
        daily_tasks=daily,
        monthly_themes=themes,
    )


def build_template_plan(goal: GoalInput) -> PlanCreate:
    """Plan a partir del currículum estático que encaja con el objetivo"""
    goal_text = goal.primary_goal or goal.custom_goal or ""
    key = match_curriculum(goal_text, goal.category_name or goal.category)
    plan_id = new_plan_id()
    days = schedule_for(goal)

    daily = assign_tasks(
        days, flatten_tasks(key), plan_id,
        time_commitment=goal.time_commitment,
        category=goal.category_name or goal.category,
        experience_level=goal.experience_level,
        include_leet_code=goal.include_leet_code,
        leet_code_language=goal.leet_code_language,
    )
    themes = fill_monthly_themes(monthly_themes(key))
    first_theme = CURRICULA[key]["themes"][0]["theme"]

    logger.info(f"🗂️ Plan plantilla '{key}' → {len(daily)} tareas en {len(days)} días")
    return _draft(
        goal, plan_id, days, daily, themes,
        title=f"{(goal.category_name or key.title())} Mastery",
        description=f"A structured learning path starting with {first_theme}",
    )


def build_ai_plan(goal: GoalInput, outline: dict) -> PlanCreate:
    """Plan a partir del esquema que devuelve la IA (themes + taskPatterns)"""
    plan_id = new_plan_id()
    days = schedule_for(goal)
    themes = fill_monthly_themes(outline.get("monthlyThemes") or [])

    daily = expand_task_patterns(
        days, outline.get("taskPatterns") or [], themes, plan_id,
        time_commitment=goal.time_commitment,
        category=goal.category_name or goal.category,
        experience_level=goal.experience_level,
        include_leet_code=goal.include_leet_code,
        leet_code_language=goal.leet_code_language,
    )

    logger.info(f"🤖 Plan IA → {len(daily)} tareas en {len(days)} días")
    name = goal.category_name or goal.category
    return _draft(
        goal, plan_id, days, daily, themes,
        title=(outline.get("title") or f"{name} Mastery")[:200],
        description=outline.get("description") or f"A journey to master {goal.primary_goal or name}",
    )
