"""
=============================================================================
CALENDAR_GEN.PY — Generador de Calendario del Plan
=============================================================================
Convierte un año (o una ventana de días) en la lista ordenada de días
en los que el usuario tiene tarea.

Reglas:
  - weekdays → solo lunes a viernes
  - fullweek → los 7 días
  - month    → el mes del calendario (1-12)
  - week     → contador que empieza en 1 y sube cada DOMINGO,
               salvo que el domingo sea el primer día recorrido

Ejemplo (2026, weekdays):
  2026-01-01 jue → week 1
  2026-01-02 vie → week 1
  2026-01-04 dom → (no se guarda, pero week pasa a 2)
  2026-01-05 lun → week 2
"""

from datetime import date, timedelta
from itertools import islice, takewhile
from typing import Iterator, Optional

from schemas import ScheduledDay, ScheduleType


def _js_day_of_week(d: date) -> int:
    """0 = domingo, 6 = sábado (formato de los documentos guardados)"""
    return (d.weekday() + 1) % 7


def is_work_day(d: date, schedule_type: ScheduleType) -> bool:
    if ScheduleType(schedule_type) == ScheduleType.fullweek:
        return True
    return d.weekday() < 5


def _walk(start: date) -> Iterator[tuple[date, int]]:
    """Recorre días consecutivos desde start junto a su número de semana"""
    week = 1
    current = start
    first = True
    while True:
        if _js_day_of_week(current) == 0 and not first:
            week += 1
        first = False
        yield current, week
        current += timedelta(days=1)


def _scheduled(days: Iterator[tuple[date, int]], schedule_type: ScheduleType) -> Iterator[ScheduledDay]:
    for d, week in days:
        if is_work_day(d, schedule_type):
            yield ScheduledDay(date=d, day_of_week=_js_day_of_week(d), month=d.month, week=week)


def generate_year_schedule(year: int, schedule_type: ScheduleType = ScheduleType.weekdays) -> list[ScheduledDay]:
    """
    Todos los días con tarea del año, en orden.

    2026 → 261 días en modo weekdays, 365 en fullweek.
    """
    days = takewhile(lambda item: item[0].year == year, _walk(date(year, 1, 1)))
    return list(_scheduled(days, schedule_type))


def generate_dates(
    schedule_type: ScheduleType = ScheduleType.weekdays,
    start_date: Optional[date] = None,
    total_days: Optional[int] = None,
) -> list[ScheduledDay]:
    """
    Ventana personalizada: los primeros total_days días con tarea
    a partir de start_date (por defecto mañana, 365 días).

    Como mucho se recorren 2 * total_days días del calendario.
    """
    start = start_date or (date.today() + timedelta(days=1))
    target = total_days or 365
    days = islice(_walk(start), target * 2)
    return list(islice(_scheduled(days, schedule_type), target))


# ─────────────────────────────────────────────────────────────────────────────
# CONSULTAS SOBRE UN PLAN YA GENERADO
# ─────────────────────────────────────────────────────────────────────────────

def tasks_for_date(tasks: list, day: date) -> list:
    key = day.isoformat()
    return [t for t in tasks if t.date == key]


def tasks_for_month(tasks: list, month: int) -> list:
    return [t for t in tasks if t.month == month]


def current_month_theme(themes: list, tasks: list, today: Optional[date] = None):
    """
    Tema del mes del plan en el que cae hoy.
    Los fines de semana (sin tarea) cuenta la última tarea anterior.
    """
    key = (today or date.today()).isoformat()
    past = [t for t in tasks if t.date <= key]
    if not past:
        return None
    month = max(past, key=lambda t: t.date).month
    return next((t for t in themes if t.month == month), None)
