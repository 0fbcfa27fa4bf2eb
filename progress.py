"""
=============================================================================
PROGRESS.PY — Progreso, Puntos y Rachas
=============================================================================
Gestiona:
  - Tareas completadas (puntos permanentes, nunca se quitan)
  - Check-in diario ("hoy he trabajado en mi plan")
  - Rachas (streaks): días seguidos con check-in

Estados de la racha:
  SIN CHECK-IN  → nunca ha hecho check-in (current_streak = 0)
  HOY HECHO     → ya hay check-in con la fecha de hoy
  ACTIVA        → último check-in ayer (o hoy)
  ROTA          → último check-in hace más de 1 día

Toda la lógica de la racha pasa por UNA función, next_streak():
  - evento CHECK_IN → la racha sigue (+1) o vuelve a empezar en 1
  - evento SWEEP    → barrido periódico: si está rota, se pone a 0

Así el check-in y el barrido nocturno nunca pueden contradecirse:
tras un hueco, el barrido deja 0 y el siguiente check-in deja 1.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from schemas import LeetCodeSubmission, PlanDocument, QuizAttempt, TaskCompletion

CHECK_IN = "check_in"
SWEEP = "sweep"

QUIZ_PASS_SCORE = 3


def _utcnow_iso() -> str:
    return datetime.utcnow().isoformat() + "Z"


def _day_of(timestamp: Optional[str]) -> Optional[date]:
    """'2026-03-04T10:20:00Z' → date(2026, 3, 4)"""
    if not timestamp:
        return None
    return date.fromisoformat(timestamp[:10])


# =============================================================================
# ===================== TRANSICIÓN DE RACHA ===================================
# =============================================================================

def next_streak(
    current: int,
    last_check_in: Optional[date],
    checked_in_yesterday: bool,
    today: date,
    event: str,
) -> int:
    """
    Devuelve el nuevo valor de current_streak.

    CHECK_IN:
      - check-in ayer            → current + 1
      - sin check-in previo      → 1
      - último hace > 1 día      → 1
      - en otro caso             → current + 1
    SWEEP:
      - último hace > 1 día      → 0
      - en otro caso             → sin cambios
    """
    gap = (today - last_check_in).days if last_check_in else None

    if event == CHECK_IN:
        if checked_in_yesterday:
            return current + 1
        if gap is None or gap > 1:
            return 1
        return current + 1

    if event == SWEEP:
        if gap is not None and gap > 1:
            return 0
        return current

    raise ValueError(f"Evento de racha desconocido: {event}")


# =============================================================================
# ===================== STORE DE PROGRESO =====================================
# =============================================================================

class ProgressStore:
    """
    Envuelve el progreso de UN plan.

    Se crea por petición a partir del PlanDocument y sus métodos
    modifican ese documento directamente:

        store = ProgressStore(plan)
        store.complete_task("task-abc-1", 20)
        store.check_in()
        guardar(plan)
    """

    def __init__(self, plan: PlanDocument):
        self.plan = plan

    # ─── Tareas ───

    def complete_task(self, task_id: str, points: int, quiz_score: Optional[int] = None,
                      now: Optional[str] = None) -> bool:
        """
        Marca la tarea como completada y suma sus puntos.
        Si ya estaba completada no hace nada (devuelve False).
        """
        if task_id in self.plan.completed_tasks:
            return False

        self.plan.completed_tasks[task_id] = TaskCompletion(
            points=points,
            completed_at=now or _utcnow_iso(),
            quiz_score=quiz_score,
        )
        self.plan.total_points += points
        self.plan.earned_points = self.plan.total_points
        return True

    def is_completed(self, task_id: str) -> bool:
        return task_id in self.plan.completed_tasks

    # ─── Rachas ───

    def check_in(self, today: Optional[date] = None, now: Optional[str] = None) -> bool:
        """Check-in del día. El segundo del mismo día no cambia nada"""
        today = today or date.today()
        key = today.isoformat()
        if self.plan.daily_check_ins.get(key):
            return False

        yesterday = (today - timedelta(days=1)).isoformat()
        self.plan.current_streak = next_streak(
            self.plan.current_streak,
            _day_of(self.plan.last_check_in),
            bool(self.plan.daily_check_ins.get(yesterday)),
            today,
            CHECK_IN,
        )
        self.plan.longest_streak = max(self.plan.longest_streak, self.plan.current_streak)
        self.plan.daily_check_ins[key] = True
        self.plan.last_check_in = now or f"{key}T{datetime.utcnow().strftime('%H:%M:%S')}Z"
        return True

    def check_streak_reset(self, today: Optional[date] = None) -> bool:
        """Barrido: pone la racha a 0 si se perdió. Devuelve True si cambió"""
        today = today or date.today()
        new_streak = next_streak(
            self.plan.current_streak,
            _day_of(self.plan.last_check_in),
            False,
            today,
            SWEEP,
        )
        changed = new_streak != self.plan.current_streak
        self.plan.current_streak = new_streak
        return changed

    def checked_in_today(self, today: Optional[date] = None) -> bool:
        return bool(self.plan.daily_check_ins.get((today or date.today()).isoformat()))

    # ─── Quiz y LeetCode ───

    def record_quiz_attempt(self, task_id: str, score: int, today: Optional[date] = None) -> QuizAttempt:
        attempt = QuizAttempt(
            task_id=task_id,
            date=(today or date.today()).isoformat(),
            score=score,
            passed=score >= QUIZ_PASS_SCORE,
            attempted_at=_utcnow_iso(),
        )
        self.plan.quiz_attempts.append(attempt)
        return attempt

    def record_leetcode_submission(self, task_id: str, problem_slug: str, language: str,
                                   passed: bool, points_earned: int = 0,
                                   problem_title: Optional[str] = None,
                                   difficulty: Optional[str] = None,
                                   today: Optional[date] = None) -> LeetCodeSubmission:
        submission = LeetCodeSubmission(
            task_id=task_id,
            date=(today or date.today()).isoformat(),
            problem_slug=problem_slug,
            problem_title=problem_title,
            difficulty=difficulty,
            language=language,
            passed=passed,
            points_earned=points_earned,
            submitted_at=_utcnow_iso(),
        )
        self.plan.leet_code_submissions.append(submission)
        return submission

    # ─── Sincronización con la web ───

    def snapshot(self) -> dict:
        """Estado de progreso en el formato que envía/recibe la web"""
        return {
            "planId": self.plan.plan_id,
            "completedTasks": {k: v.to_document() for k, v in self.plan.completed_tasks.items()},
            "totalPoints": self.plan.total_points,
            "currentStreak": self.plan.current_streak,
            "longestStreak": self.plan.longest_streak,
            "lastCheckIn": self.plan.last_check_in,
            "dailyCheckIns": dict(self.plan.daily_check_ins),
        }

    def restore(self, completed_tasks: dict, daily_check_ins: dict, current_streak: int,
                longest_streak: int, last_check_in: Optional[str]) -> None:
        """
        Fusiona el estado que llega de la web.

        Las completadas y los check-ins solo se AÑADEN (las ya guardadas
        se conservan tal cual). La racha de la web manda, pero la más
        larga nunca baja.
        """
        for task_id, record in completed_tasks.items():
            if task_id not in self.plan.completed_tasks:
                self.plan.completed_tasks[task_id] = record

        for day, checked in daily_check_ins.items():
            if checked:
                self.plan.daily_check_ins[day] = True

        self.plan.total_points = sum(r.points for r in self.plan.completed_tasks.values())
        self.plan.earned_points = self.plan.total_points
        self.plan.current_streak = current_streak
        self.plan.longest_streak = max(self.plan.longest_streak, longest_streak, current_streak)
        if last_check_in and (not self.plan.last_check_in or last_check_in > self.plan.last_check_in):
            self.plan.last_check_in = last_check_in


# ─────────────────────────────────────────────────────────────────────────────
# ESTADÍSTICAS
# ─────────────────────────────────────────────────────────────────────────────

def progress_percent(completed: int, total: int) -> int:
    if total == 0:
        return 0
    return round(completed / total * 100)
