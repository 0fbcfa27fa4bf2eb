"""
=============================================================================
STORE.PY — Acceso a Usuarios y Planes
=============================================================================
Todas las lecturas y escrituras de documentos pasan por aquí.

Dos formatos de usuario conviven en la BD:
  V1 → un único plan embebido en el propio usuario (formato antiguo)
  V2 → lista de planes + puntero al plan activo (schemaVersion = 2)

La regla es sencilla: al LEER, todo V1 se convierte a V2
(upgrade_user_document). El resto del código solo conoce V2.
La primera vez que se guarda un usuario convertido, queda como V2.

Otras reglas:
  - Máximo MAX_PLANS_PER_USER planes no archivados por usuario
  - Borrar un plan = archivarlo (se puede desarchivar)
  - Las tareas de cada plan se guardan en plan_tasks, no en el usuario
  - Cada escritura comprueba la versión leída (409 si alguien escribió antes)
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Union

from sqlalchemy.orm import Session

from models import PlanTasksRecord, UserDocumentRecord
from progress import ProgressStore, progress_percent
from schemas import (
    DailyTask, PlanCreate, PlanDocument, PlanSummary, PLAN_CATEGORIES,
    UserCreate, UserDocumentV1, UserDocumentV2, UserSettings, UserStateSync, UserUpdate
)
from validation import format_phone, normalize_email, phones_match

logger = logging.getLogger("lockin.store")

MAX_PLANS_PER_USER = 3
CURRENT_SCHEMA_VERSION = 2

# Campos de un plan que se pueden cambiar con action=update (camelCase → snake_case)
UPDATABLE_PLAN_FIELDS = {
    "planTitle": "plan_title",
    "planDescription": "plan_description",
    "planIcon": "plan_icon",
    "timeCommitment": "time_commitment",
    "experienceLevel": "experience_level",
    "includeLeetCode": "include_leet_code",
    "leetCodeLanguage": "leet_code_language",
}


# =============================================================================
# ===================== ERRORES ===============================================
# =============================================================================

class StoreError(Exception):
    """Base de los errores del store. status_code → código HTTP"""
    status_code = 500


class UserNotFoundError(StoreError):
    status_code = 404

    def __init__(self, email: str):
        super().__init__("User not found")
        self.email = email


class PlanNotFoundError(StoreError):
    status_code = 404

    def __init__(self, plan_id: str):
        super().__init__("Plan not found")
        self.plan_id = plan_id


class UserExistsError(StoreError):
    status_code = 409

    def __init__(self, email: str):
        super().__init__("An account with this email already exists")
        self.email = email


class PlanLimitError(StoreError):
    status_code = 400

    def __init__(self):
        super().__init__(f"Maximum {MAX_PLANS_PER_USER} plans allowed")


class VersionConflictError(StoreError):
    status_code = 409

    def __init__(self, email: str):
        super().__init__("Your data changed in another session. Reload and try again.")
        self.email = email


def _now() -> str:
    return datetime.utcnow().isoformat() + "Z"


# =============================================================================
# ===================== FORMATOS V1 / V2 ======================================
# =============================================================================

@dataclass
class LoadedUser:
    """Usuario leído de la BD: documento V2 + versión leída"""
    document: UserDocumentV2
    version: int
    upgraded: bool = False   # True si en la BD sigue guardado como V1


def parse_user_document(raw: dict) -> Union[UserDocumentV1, UserDocumentV2]:
    """Decide el formato por schemaVersion (y la presencia de "plans")"""
    if raw.get("schemaVersion") == CURRENT_SCHEMA_VERSION and "plans" in raw:
        return UserDocumentV2.model_validate(raw)
    return UserDocumentV1.model_validate({**raw, "schemaVersion": 1})


def upgrade_user_document(doc: Union[UserDocumentV1, UserDocumentV2]) -> UserDocumentV2:
    """
    V1 → V2. El plan embebido pasa a ser el único plan y el activo.
    Un V1 sin plan da un V2 sin planes.
    """
    if isinstance(doc, UserDocumentV2):
        return doc

    updated_at = doc.updated_at or doc.created_at
    plans = []
    if doc.plan_id:
        category = doc.plan_category if doc.plan_category in PLAN_CATEGORIES else "software"
        plans.append(PlanDocument(
            plan_id=doc.plan_id,
            plan_title=doc.plan_title,
            plan_description=doc.plan_description,
            plan_category=category,
            plan_icon=PLAN_CATEGORIES[category]["icon"],
            start_date=doc.plan_start_date or "",
            end_date=doc.plan_end_date or "",
            total_days=doc.total_days,
            total_tasks=len(doc.daily_tasks),
            schedule_type=doc.schedule_type,
            time_commitment=doc.time_commitment,
            include_leet_code=doc.include_leet_code,
            leet_code_language=doc.leet_code_language,
            daily_tasks=doc.daily_tasks,
            monthly_themes=doc.monthly_themes,
            completed_tasks=doc.completed_tasks,
            total_points=doc.total_points,
            earned_points=doc.total_points,
            current_streak=doc.current_streak,
            longest_streak=doc.longest_streak,
            last_check_in=doc.last_check_in,
            daily_check_ins=doc.daily_check_ins,
            created_at=doc.created_at,
            updated_at=updated_at,
        ))

    return UserDocumentV2(
        email=doc.email,
        name=doc.name,
        phone_number=doc.phone_number,
        created_at=doc.created_at,
        updated_at=updated_at,
        plans=plans,
        active_plan_id=doc.plan_id,
        global_total_points=doc.total_points,
        global_current_streak=doc.current_streak,
        global_longest_streak=doc.longest_streak,
    )


# =============================================================================
# ===================== USUARIOS ==============================================
# =============================================================================

def _get_record(db: Session, email: str) -> Optional[UserDocumentRecord]:
    return db.query(UserDocumentRecord).filter(UserDocumentRecord.email == normalize_email(email)).first()


def find_user(db: Session, email: str) -> Optional[LoadedUser]:
    record = _get_record(db, email)
    if record is None:
        return None
    parsed = parse_user_document(record.document)
    return LoadedUser(
        document=upgrade_user_document(parsed),
        version=record.version,
        upgraded=isinstance(parsed, UserDocumentV1),
    )


def get_user(db: Session, email: str) -> LoadedUser:
    user = find_user(db, email)
    if user is None:
        raise UserNotFoundError(email)
    return user


def check_email_exists(db: Session, email: str) -> bool:
    return _get_record(db, email) is not None


def create_user(db: Session, data: UserCreate) -> LoadedUser:
    """Crea un usuario V2 sin planes. 409 si el email ya existe"""
    email = normalize_email(data.email)
    if check_email_exists(db, email):
        raise UserExistsError(email)

    now = _now()
    document = UserDocumentV2(
        email=email,
        name=data.name.strip(),
        phone_number=format_phone(data.phone_number) if data.phone_number else "",
        created_at=now,
        updated_at=now,
        settings=data.settings or UserSettings(),
    )
    db.add(UserDocumentRecord(
        email=email,
        schema_version=CURRENT_SCHEMA_VERSION,
        version=1,
        document=document.to_document(),
    ))
    db.commit()

    logger.info(f"👤 Nuevo usuario: {document.name} ({email})")
    return LoadedUser(document=document, version=1)


def save_user(db: Session, user: LoadedUser, expected_version: Optional[int] = None) -> int:
    """
    Guarda el documento SOLO si la versión en BD sigue siendo la leída
    (o expected_version si la web la envía). Devuelve la nueva versión.

    Antes de guardar, las tareas de cada plan se mueven a plan_tasks.
    """
    expected = user.version if expected_version is None else expected_version
    doc = user.document
    doc.email = normalize_email(doc.email)
    doc.updated_at = _now()

    for plan in doc.plans:
        if plan.daily_tasks:
            save_plan_tasks(db, doc.email, plan.plan_id, plan.daily_tasks, commit=False)
            plan.total_tasks = len(plan.daily_tasks)
            plan.daily_tasks = []

    rows = db.query(UserDocumentRecord).filter(
        UserDocumentRecord.email == doc.email,
        UserDocumentRecord.version == expected,
    ).update({
        UserDocumentRecord.document: doc.to_document(),
        UserDocumentRecord.schema_version: CURRENT_SCHEMA_VERSION,
        UserDocumentRecord.version: expected + 1,
        UserDocumentRecord.updated_at: datetime.utcnow(),
    }, synchronize_session=False)

    if rows == 0:
        db.rollback()
        logger.warning(f"⚠️ Conflicto de versión para {doc.email} (esperada {expected})")
        raise VersionConflictError(doc.email)

    db.commit()
    if user.upgraded:
        logger.info(f"🔄 Usuario {doc.email} migrado a V2")
        user.upgraded = False
    user.version = expected + 1
    return user.version


def update_user_profile(db: Session, email: str, data: UserUpdate) -> LoadedUser:
    user = get_user(db, email)
    if data.name is not None:
        user.document.name = data.name.strip()
    if data.phone_number is not None:
        user.document.phone_number = format_phone(data.phone_number) if data.phone_number else ""
    if data.settings is not None:
        user.document.settings = data.settings
    save_user(db, user)
    return user


def verify_login(db: Session, email: str, phone: str) -> Optional[LoadedUser]:
    """El teléfono hace de contraseña: email + teléfono deben coincidir"""
    user = find_user(db, email)
    if user is None or not phones_match(user.document.phone_number, phone):
        return None
    return user


def scan_all_users(db: Session) -> list[LoadedUser]:
    """Todos los usuarios (para el recordatorio masivo y el barrido de rachas)"""
    users = []
    for record in db.query(UserDocumentRecord).order_by(UserDocumentRecord.email).all():
        parsed = parse_user_document(record.document)
        users.append(LoadedUser(
            document=upgrade_user_document(parsed),
            version=record.version,
            upgraded=isinstance(parsed, UserDocumentV1),
        ))
    return users


# =============================================================================
# ===================== TAREAS (TABLA APARTE) =================================
# =============================================================================

def _tasks_record(db: Session, email: str, plan_id: str) -> Optional[PlanTasksRecord]:
    return db.query(PlanTasksRecord).filter(
        PlanTasksRecord.plan_id == plan_id,
        PlanTasksRecord.email == normalize_email(email),
    ).first()


def plan_id_taken(db: Session, plan_id: str) -> bool:
    """Los ids de plan son globales: ninguno puede repetirse entre usuarios"""
    return db.query(PlanTasksRecord).filter(PlanTasksRecord.plan_id == plan_id).first() is not None


def save_plan_tasks(db: Session, email: str, plan_id: str, tasks: list[DailyTask], commit: bool = True):
    payload = [t.to_document() for t in tasks]
    record = _tasks_record(db, email, plan_id)
    if record is None:
        db.add(PlanTasksRecord(plan_id=plan_id, email=normalize_email(email), tasks=payload, task_count=len(payload)))
    else:
        record.tasks = payload
        record.task_count = len(payload)
    if commit:
        db.commit()


def get_plan_tasks(db: Session, email: str, plan_id: str) -> list[DailyTask]:
    record = _tasks_record(db, email, plan_id)
    if record is None:
        return []
    return [DailyTask.model_validate(t) for t in record.tasks]


# =============================================================================
# ===================== PLANES ================================================
# =============================================================================

def active_plan_count(doc: UserDocumentV2) -> int:
    return sum(1 for p in doc.plans if not p.is_archived)


def can_add_plan(doc: UserDocumentV2) -> bool:
    return active_plan_count(doc) < MAX_PLANS_PER_USER


def needs_plan(doc: UserDocumentV2) -> bool:
    """Sin plan activo → la web manda al asistente para crear uno"""
    return doc.active_plan_id is None


def plan_to_summary(plan: PlanDocument, active_plan_id: Optional[str] = None) -> PlanSummary:
    completed = len(plan.completed_tasks)
    total = plan.total_tasks or len(plan.daily_tasks)
    return PlanSummary(
        plan_id=plan.plan_id,
        plan_title=plan.plan_title or "My Learning Plan",
        plan_description=plan.plan_description or "Personal learning journey",
        plan_category=plan.plan_category,
        plan_icon=plan.plan_icon,
        total_days=plan.total_days,
        total_tasks=total,
        completed_tasks_count=completed,
        total_points=plan.total_points,
        earned_points=plan.earned_points,
        current_streak=plan.current_streak,
        start_date=plan.start_date,
        end_date=plan.end_date,
        is_active=plan.plan_id == active_plan_id,
        created_at=plan.created_at,
        progress_percent=progress_percent(completed, total),
        is_archived=plan.is_archived,
    )


def plan_summaries(doc: UserDocumentV2) -> list[PlanSummary]:
    return [plan_to_summary(p, doc.active_plan_id) for p in doc.plans]


def find_plan(doc: UserDocumentV2, plan_id: str) -> PlanDocument:
    for plan in doc.plans:
        if plan.plan_id == plan_id:
            return plan
    raise PlanNotFoundError(plan_id)


def load_plan_tasks(db: Session, email: str, plan: PlanDocument) -> PlanDocument:
    """Rellena daily_tasks desde plan_tasks si el documento no las trae"""
    if not plan.daily_tasks:
        plan.daily_tasks = get_plan_tasks(db, email, plan.plan_id)
    return plan


def get_plan(db: Session, email: str, plan_id: str) -> PlanDocument:
    user = get_user(db, email)
    return load_plan_tasks(db, email, find_plan(user.document, plan_id))


def get_active_plan(db: Session, email: str) -> Optional[PlanDocument]:
    user = get_user(db, email)
    if user.document.active_plan_id is None:
        return None
    return load_plan_tasks(db, email, find_plan(user.document, user.document.active_plan_id))


def add_plan(db: Session, email: str, data: PlanCreate) -> PlanDocument:
    """
    Añade un plan al usuario.

    - Falla con PlanLimitError si ya tiene MAX_PLANS_PER_USER sin archivar
    - Si el usuario no tenía plan activo, este pasa a ser el activo
    """
    user = get_user(db, email)
    doc = user.document
    if not can_add_plan(doc):
        raise PlanLimitError()

    plan_id = data.plan_id or str(uuid.uuid4())
    if any(p.plan_id == plan_id for p in doc.plans) or plan_id_taken(db, plan_id):
        plan_id = str(uuid.uuid4())

    category = data.plan_category if data.plan_category in PLAN_CATEGORIES else "custom"
    now = _now()
    plan = PlanDocument(
        plan_id=plan_id,
        plan_title=data.plan_title,
        plan_description=data.plan_description,
        plan_category=category,
        plan_icon=data.plan_icon or PLAN_CATEGORIES[category]["icon"],
        start_date=data.start_date,
        end_date=data.end_date,
        total_days=data.total_days or len({t.date for t in data.daily_tasks}),
        total_tasks=len(data.daily_tasks),
        schedule_type=data.schedule_type,
        time_commitment=data.time_commitment,
        experience_level=data.experience_level,
        include_leet_code=data.include_leet_code,
        leet_code_language=data.leet_code_language,
        daily_tasks=list(data.daily_tasks),
        monthly_themes=list(data.monthly_themes),
        created_at=now,
        updated_at=now,
    )
    tasks = plan.daily_tasks

    doc.plans.append(plan)
    if doc.active_plan_id is None:
        doc.active_plan_id = plan_id

    save_user(db, user)
    plan.daily_tasks = tasks
    logger.info(f"📘 Plan creado: '{plan.plan_title}' ({plan.total_tasks} tareas) → {doc.email}")
    return plan


def _modify_plan(db: Session, email: str, plan_id: str,
                 change: Callable[[UserDocumentV2, PlanDocument], None],
                 expected_version: Optional[int] = None) -> LoadedUser:
    """Lee → aplica change(doc, plan) → guarda con comprobación de versión"""
    user = get_user(db, email)
    plan = find_plan(user.document, plan_id)
    change(user.document, plan)
    plan.updated_at = _now()
    save_user(db, user, expected_version)
    return user


def update_plan(db: Session, email: str, plan_id: str, updates: dict,
                expected_version: Optional[int] = None) -> LoadedUser:
    """Solo se aplican los campos de UPDATABLE_PLAN_FIELDS; el resto se ignora"""
    def change(doc, plan):
        for key, value in (updates or {}).items():
            field = UPDATABLE_PLAN_FIELDS.get(key) or (key if key in UPDATABLE_PLAN_FIELDS.values() else None)
            if field:
                setattr(plan, field, value)
        # Revalida tipos (por ejemplo includeLeetCode = "yes")
        PlanDocument.model_validate(plan.model_dump())

    return _modify_plan(db, email, plan_id, change, expected_version)


def rename_plan(db: Session, email: str, plan_id: str, title: str,
                expected_version: Optional[int] = None) -> LoadedUser:
    def change(doc, plan):
        plan.plan_title = title.strip()

    return _modify_plan(db, email, plan_id, change, expected_version)


def switch_active_plan(db: Session, email: str, plan_id: str,
                       expected_version: Optional[int] = None) -> LoadedUser:
    def change(doc, plan):
        if plan.is_archived:
            raise PlanNotFoundError(plan_id)
        doc.active_plan_id = plan.plan_id

    return _modify_plan(db, email, plan_id, change, expected_version)


def archive_plan(db: Session, email: str, plan_id: str,
                 expected_version: Optional[int] = None) -> LoadedUser:
    """
    Archiva (borrado reversible). Si era el plan activo, pasa a activo
    el primer plan sin archivar; si no queda ninguno, el usuario se
    queda sin plan activo (needs_plan).
    """
    def change(doc, plan):
        if plan.is_archived:
            return
        plan.is_archived = True
        plan.archived_at = _now()
        if doc.active_plan_id == plan.plan_id:
            remaining = [p for p in doc.plans if not p.is_archived]
            doc.active_plan_id = remaining[0].plan_id if remaining else None

    user = _modify_plan(db, email, plan_id, change, expected_version)
    logger.info(f"🗄️ Plan archivado: {plan_id} ({email})")
    return user


def unarchive_plan(db: Session, email: str, plan_id: str,
                   expected_version: Optional[int] = None) -> LoadedUser:
    """Recupera un plan archivado (respetando el máximo de planes)"""
    def change(doc, plan):
        if not plan.is_archived:
            return
        if not can_add_plan(doc):
            raise PlanLimitError()
        plan.is_archived = False
        plan.archived_at = None
        if doc.active_plan_id is None:
            doc.active_plan_id = plan.plan_id

    return _modify_plan(db, email, plan_id, change, expected_version)


# =============================================================================
# ===================== PROGRESO ==============================================
# =============================================================================

def recompute_global_stats(doc: UserDocumentV2):
    """
    Estadísticas globales a partir de todos los planes:
      puntos = suma | racha actual = máxima | racha más larga = máxima histórica
    """
    doc.global_total_points = sum(p.earned_points for p in doc.plans)
    doc.global_current_streak = max((p.current_streak for p in doc.plans), default=0)
    doc.global_longest_streak = max(
        [doc.global_longest_streak] + [p.longest_streak for p in doc.plans]
    )


def apply_progress(db: Session, email: str, plan_id: Optional[str],
                   action: Callable[[ProgressStore], object],
                   expected_version: Optional[int] = None):
    """
    Ejecuta una acción de progreso sobre un plan y guarda.

        apply_progress(db, email, plan_id, lambda s: s.check_in(today))

    plan_id = None → plan activo. Devuelve (resultado, plan, usuario).
    """
    user = get_user(db, email)
    doc = user.document
    target = plan_id or doc.active_plan_id
    if target is None:
        raise PlanNotFoundError("active")
    plan = find_plan(doc, target)

    result = action(ProgressStore(plan))
    plan.updated_at = _now()
    recompute_global_stats(doc)
    save_user(db, user, expected_version)
    return result, plan, user


def sync_user_state(db: Session, email: str, state: UserStateSync):
    """La web envía su estado completo; se fusiona con el guardado"""
    def action(store: ProgressStore):
        store.restore(
            completed_tasks=state.completed_tasks,
            daily_check_ins=state.daily_check_ins,
            current_streak=state.current_streak,
            longest_streak=state.longest_streak,
            last_check_in=state.last_check_in,
        )
        if state.quiz_attempts is not None:
            known = {(a.task_id, a.attempted_at) for a in store.plan.quiz_attempts}
            store.plan.quiz_attempts += [a for a in state.quiz_attempts if (a.task_id, a.attempted_at) not in known]
        if state.leet_code_submissions is not None:
            known = {(s.task_id, s.submitted_at) for s in store.plan.leet_code_submissions}
            store.plan.leet_code_submissions += [
                s for s in state.leet_code_submissions if (s.task_id, s.submitted_at) not in known
            ]
        return store.snapshot()

    return apply_progress(db, email, state.plan_id, action, state.expected_version)


def find_task(db: Session, email: str, plan_id: str, task_id: str) -> Optional[DailyTask]:
    for task in get_plan(db, email, plan_id).daily_tasks:
        if task.task_id == task_id:
            return task
    return None
