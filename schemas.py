"""
=============================================================================
SCHEMAS.PY — Esquemas de Validación (Pydantic)
=============================================================================
Dos tipos de esquemas conviven aquí:

  1. DOCUMENTOS → la forma en que se guardan usuarios y planes en la BD
     (UserDocumentV1, UserDocumentV2, PlanDocument, DailyTask...)
  2. PETICIONES/RESPUESTAS → qué datos acepta y devuelve la API

Todos heredan de CamelModel:
  - En Python los campos van en snake_case (plan_id, daily_check_ins)
  - En JSON (BD y API) salen en camelCase (planId, dailyCheckIns)
  Así los documentos guardados por la web siguen siendo compatibles.

Convención de nombres:
  XxxCreate → para crear algo nuevo (POST)
  XxxUpdate → para actualizar algo (PUT/PATCH)
  XxxRequest → cuerpo de una acción (generar quiz, enviar SMS...)
"""

from datetime import date
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from validation import phone_error


class CamelModel(BaseModel):
    """Base: snake_case en Python, camelCase en JSON"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict:
        """Forma JSON lista para guardar en la BD"""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# ===================== ENUMS =================================================
# =============================================================================

class ScheduleType(str, Enum):
    """Qué días de la semana tienen tarea"""
    weekdays = "weekdays"    # Lunes a viernes
    fullweek = "fullweek"    # Los 7 días


class TaskType(str, Enum):
    learn = "learn"
    practice = "practice"
    build = "build"
    review = "review"


class NotificationType(str, Enum):
    reminder = "reminder"
    missed_checkin = "missed-checkin"
    streak_warning = "streak-warning"
    achievement = "achievement"
    weekly_summary = "weekly-summary"


# Icono y si la categoría muestra retos de LeetCode
PLAN_CATEGORIES = {
    "software": {"name": "Software Development", "icon": "💻", "show_leetcode": True},
    "hardware": {"name": "Hardware & Electronics", "icon": "🔧", "show_leetcode": False},
    "language": {"name": "Language Learning", "icon": "🌍", "show_leetcode": False},
    "music": {"name": "Music & Instruments", "icon": "🎵", "show_leetcode": False},
    "fitness": {"name": "Fitness & Health", "icon": "💪", "show_leetcode": False},
    "business": {"name": "Business & Entrepreneurship", "icon": "📈", "show_leetcode": False},
    "creative": {"name": "Creative Arts", "icon": "🎨", "show_leetcode": False},
    "academic": {"name": "Academic Studies", "icon": "📚", "show_leetcode": False},
    "professional": {"name": "Professional Skills", "icon": "💼", "show_leetcode": False},
    "personal": {"name": "Personal Development", "icon": "🌱", "show_leetcode": False},
    "custom": {"name": "Custom Goal", "icon": "✨", "show_leetcode": False},
}


# =============================================================================
# ===================== CALENDARIO Y TAREAS ===================================
# =============================================================================

class ScheduledDay(CamelModel):
    """Un día con tarea. Se genera una vez por plan y no cambia"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    date: date
    day_of_week: int      # 0 = domingo ... 6 = sábado
    month: int            # 1-12
    week: int             # contador de semanas desde el inicio


class TaskResource(CamelModel):
    type: str
    title: str
    url: str
    description: Optional[str] = None
    source: Optional[str] = None
    estimated_minutes: Optional[int] = None
    difficulty: Optional[str] = None
    is_free: Optional[bool] = None


class DailyTask(CamelModel):
    task_id: str
    day: int
    date: str                # yyyy-mm-dd
    title: str
    description: str = ""
    type: TaskType = TaskType.learn
    estimated_minutes: int = 60
    points: int = 20
    month: int
    week: int
    is_leet_code: bool = False
    resources: list[TaskResource] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class MonthlyTheme(CamelModel):
    month: int
    theme: str
    focus: str = ""
    topics: list[str] = Field(default_factory=list)
    project: str = ""


# Lo que devuelve la IA antes de convertirse en plan

class PatternTask(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    topic: Optional[str] = None
    resources: Optional[list[dict]] = None


class TaskPattern(CamelModel):
    month: Optional[int] = None
    tasks: list[PatternTask] = Field(default_factory=list)


class PlanOutline(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    monthly_themes: list[MonthlyTheme] = Field(min_length=1)
    task_patterns: list[TaskPattern] = Field(default_factory=list)


# =============================================================================
# ===================== PROGRESO ==============================================
# =============================================================================

class TaskCompletion(CamelModel):
    """Registro de tarea completada. Una vez creado no se modifica"""
    points: int
    completed_at: str
    quiz_score: Optional[int] = None


class QuizAttempt(CamelModel):
    task_id: str
    date: str
    score: int
    passed: bool
    attempted_at: str


class LeetCodeSubmission(CamelModel):
    task_id: str
    date: str
    problem_slug: str
    problem_title: Optional[str] = None
    difficulty: Optional[str] = None
    language: str
    passed: bool
    points_earned: int = 0
    submitted_at: str


# =============================================================================
# ===================== PLANES ================================================
# =============================================================================

class PlanDocument(CamelModel):
    """Un plan completo de 12 meses con su progreso"""
    plan_id: str
    plan_title: str = "My Learning Plan"
    plan_description: str = "Personal learning journey"
    plan_category: str = "software"
    plan_icon: str = "💻"
    start_date: str
    end_date: str
    total_days: int = 0
    total_tasks: int = 0
    schedule_type: ScheduleType = ScheduleType.weekdays
    time_commitment: str = "1hr-daily"
    experience_level: str = "beginner"
    include_leet_code: bool = False
    leet_code_language: Optional[str] = None

    daily_tasks: list[DailyTask] = Field(default_factory=list)
    monthly_themes: list[MonthlyTheme] = Field(default_factory=list)

    completed_tasks: dict[str, TaskCompletion] = Field(default_factory=dict)
    total_points: int = 0
    earned_points: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_check_in: Optional[str] = None
    daily_check_ins: dict[str, bool] = Field(default_factory=dict)
    quiz_attempts: list[QuizAttempt] = Field(default_factory=list)
    leet_code_submissions: list[LeetCodeSubmission] = Field(default_factory=list)

    created_at: str
    updated_at: str
    is_archived: bool = False
    archived_at: Optional[str] = None


class PlanSummary(CamelModel):
    plan_id: str
    plan_title: str
    plan_description: str
    plan_category: str
    plan_icon: str
    total_days: int
    total_tasks: int
    completed_tasks_count: int
    total_points: int
    earned_points: int
    current_streak: int
    start_date: str
    end_date: str
    is_active: bool = False
    created_at: str
    progress_percent: int
    is_archived: bool = False


class PlanCreate(CamelModel):
    """Plan recién generado que el usuario decide guardar"""
    plan_id: Optional[str] = None
    plan_title: str = Field(default="My Learning Plan", min_length=1, max_length=200)
    plan_description: str = "Personal learning journey"
    plan_category: str = "software"
    plan_icon: Optional[str] = None
    start_date: str
    end_date: str
    total_days: int = 0
    schedule_type: ScheduleType = ScheduleType.weekdays
    time_commitment: str = "1hr-daily"
    experience_level: str = "beginner"
    include_leet_code: bool = False
    leet_code_language: Optional[str] = None
    daily_tasks: list[DailyTask] = Field(min_length=1)
    monthly_themes: list[MonthlyTheme] = Field(default_factory=list)


class PlanAction(CamelModel):
    """PUT /api/plans/{id}: switch | update | rename | archive | unarchive"""
    action: Literal["switch", "update", "rename", "archive", "unarchive"]
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    updates: Optional[dict] = None
    expected_version: Optional[int] = None


# =============================================================================
# ===================== USUARIOS ==============================================
# =============================================================================

class UserSettings(CamelModel):
    reminder_time: str = "09:00"
    timezone: str = "Africa/Accra"
    email_notifications: bool = True
    sms_notifications: bool = True
    theme: str = "dark"


class UserDocumentV1(CamelModel):
    """Formato antiguo: un único plan embebido en el usuario"""
    email: str
    name: str = ""
    phone_number: str = ""
    created_at: str
    updated_at: Optional[str] = None
    schema_version: Literal[1] = 1

    schedule_type: ScheduleType = ScheduleType.weekdays
    time_commitment: str = "1hr-daily"
    include_leet_code: bool = False
    leet_code_language: Optional[str] = None

    plan_id: Optional[str] = None
    plan_title: str = "My Learning Plan"
    plan_description: str = "Personal learning journey"
    plan_category: str = "software"
    plan_start_date: Optional[str] = None
    plan_end_date: Optional[str] = None
    total_days: int = 0
    daily_tasks: list[DailyTask] = Field(default_factory=list)
    monthly_themes: list[MonthlyTheme] = Field(default_factory=list)

    completed_tasks: dict[str, TaskCompletion] = Field(default_factory=dict)
    total_points: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_check_in: Optional[str] = None
    daily_check_ins: dict[str, bool] = Field(default_factory=dict)


class UserDocumentV2(CamelModel):
    """Formato actual: varios planes + puntero al plan activo"""
    email: str
    name: str = ""
    phone_number: str = ""
    created_at: str
    updated_at: str
    settings: UserSettings = Field(default_factory=UserSettings)
    plans: list[PlanDocument] = Field(default_factory=list)
    active_plan_id: Optional[str] = None
    global_total_points: int = 0
    global_current_streak: int = 0
    global_longest_streak: int = 0
    schema_version: Literal[2] = 2


class UserCreate(CamelModel):
    email: EmailStr
    name: str = Field(min_length=1, max_length=100)
    phone_number: str = Field(min_length=1)
    settings: Optional[UserSettings] = None
    plan: Optional[PlanCreate] = None

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v):
        error = phone_error(v)
        if error:
            raise ValueError(error)
        return v


class UserUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone_number: Optional[str] = None
    settings: Optional[UserSettings] = None

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v):
        error = phone_error(v)
        if error:
            raise ValueError(error)
        return v


class UserResponse(CamelModel):
    email: str
    name: str
    phone_number: str
    created_at: str
    settings: UserSettings
    active_plan_id: Optional[str] = None
    global_total_points: int = 0
    global_current_streak: int = 0
    global_longest_streak: int = 0


class LoginRequest(CamelModel):
    email: EmailStr
    phone_number: str = Field(min_length=1)


class CheckEmailRequest(CamelModel):
    email: EmailStr


class TokenResponse(CamelModel):
    success: bool = True
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
    needs_plan: bool = False
    plans: list[PlanSummary] = Field(default_factory=list)
    active_plan: Optional[PlanDocument] = None


# =============================================================================
# ===================== PROGRESO (API) ========================================
# =============================================================================

class CompleteTaskRequest(CamelModel):
    task_id: str = Field(min_length=1)
    points: Optional[int] = Field(default=None, ge=0)
    quiz_score: Optional[int] = None
    expected_version: Optional[int] = None


class CheckInRequest(CamelModel):
    expected_version: Optional[int] = None


class UserStateSync(CamelModel):
    """Estado completo que la web envía para sincronizar el progreso"""
    plan_id: Optional[str] = None
    completed_tasks: dict[str, TaskCompletion] = Field(default_factory=dict)
    total_points: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_check_in: Optional[str] = None
    daily_check_ins: dict[str, bool] = Field(default_factory=dict)
    quiz_attempts: Optional[list[QuizAttempt]] = None
    leet_code_submissions: Optional[list[LeetCodeSubmission]] = None
    expected_version: Optional[int] = None


# =============================================================================
# ===================== GENERACIÓN (IA) =======================================
# =============================================================================

class GoalInput(CamelModel):
    """Lo que recoge el asistente de la web antes de generar el plan"""
    category: str = "software"
    category_name: Optional[str] = None
    primary_goal: str = Field(min_length=3)
    sub_goals: list[str] = Field(default_factory=list)
    selected_options: dict = Field(default_factory=dict)
    time_commitment: str = "1hr-daily"
    experience_level: str = "beginner"
    constraints: list[str] = Field(default_factory=list)
    custom_goal: Optional[str] = None
    schedule_type: ScheduleType = ScheduleType.weekdays
    custom_curriculum: Optional[str] = None
    include_leet_code: bool = False
    leet_code_language: str = "python"
    start_date: Optional[date] = None
    total_days: Optional[int] = Field(default=None, ge=1, le=730)
    year: Optional[int] = Field(default=None, ge=2000, le=2100)
    source: Optional[Literal["ai", "template"]] = None


class EnhancedPlanRequest(CamelModel):
    goal_input: GoalInput
    include_leet_code: Optional[bool] = None
    leet_code_language: Optional[str] = None


class AnalyzeGoalRequest(CamelModel):
    goal: str = ""
    selected_category: Optional[str] = None
    category_name: Optional[str] = None


class FollowUpRequest(CamelModel):
    """El usuario eligió "Other" y escribió su propia respuesta"""
    goal: str = ""
    category_name: Optional[str] = None
    parent_question: str = Field(min_length=1)
    custom_answer: str = Field(min_length=1)
    previous_answers: dict = Field(default_factory=dict)


class YearPlanRequest(CamelModel):
    goal: str = Field(min_length=3)
    experience: str = "beginner"
    stack: str = ""
    time_available: str = "1hr-daily"
    constraints: str = ""


class QuizRequest(CamelModel):
    task_id: str = ""
    task_title: str = ""
    task_description: str = ""
    quiz_topics: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    category: str = ""
    experience_level: str = "beginner"


class ResourceRequest(CamelModel):
    task_title: str = Field(min_length=1)
    task_description: str = ""
    task_type: TaskType = TaskType.learn
    category: str = ""
    experience_level: str = "beginner"


class VerifyLeetCodeRequest(CamelModel):
    problem_slug: str = Field(min_length=1)
    problem_title: Optional[str] = None
    difficulty: str = "Easy"
    code: str = Field(min_length=1)
    language: str = "python"
    user_time_complexity: str = ""
    user_space_complexity: str = ""
    task_id: Optional[str] = None


# =============================================================================
# ===================== NOTIFICACIONES ========================================
# =============================================================================

class NotificationRequest(CamelModel):
    """
    send           → aviso directo al email y/o teléfono indicados
    batch-reminder → recordatorio a todos los que no han hecho check-in hoy
    """
    action: Literal["send", "batch-reminder"] = "send"
    type: NotificationType = NotificationType.reminder
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = None
    name: Optional[str] = None
    custom_message: Optional[str] = Field(default=None, max_length=640)

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v):
        error = phone_error(v)
        if error:
            raise ValueError(error)
        return v


class SmsRequest(CamelModel):
    to: str = Field(min_length=1)
    message: str = Field(min_length=1, max_length=640)

    @field_validator("to")
    @classmethod
    def check_phone(cls, v):
        error = phone_error(v)
        if error:
            raise ValueError(error)
        return v


class EmailRequest(CamelModel):
    to: EmailStr
    subject: str = Field(min_length=1, max_length=200)
    plan_summary: Optional[str] = None
    user_name: Optional[str] = None


class WelcomeRequest(CamelModel):
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = None
    user_name: Optional[str] = None
    plan_title: str = "My Learning Plan"
    start_date: Optional[date] = None
