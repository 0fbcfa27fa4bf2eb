"""
=============================================================================
MODELS.PY — Tablas de la Base de Datos
=============================================================================
Solo hay dos tablas. El contenido real vive en columnas JSON:

  USER_DOCUMENTS (clave: email en minúsculas)
  ├── schema_version → 1 (formato antiguo, un plan) o 2 (varios planes)
  ├── version        → contador que sube en cada escritura
  └── document       → el documento completo del usuario (JSON)

  PLAN_TASKS (clave: plan_id)
  └── tasks          → lista completa de DailyTask del plan (JSON)

¿Por qué las tareas van aparte?
  Un plan de 365 días con recursos ocupa cientos de KB. El documento
  del usuario se lee en casi cada petición; las tareas, solo al abrir
  un plan.

¿Para qué sirve version?
  Escritura condicional: "guarda SOLO si nadie ha escrito desde que
  leí". Si dos pestañas escriben a la vez, la segunda recibe un 409
  en vez de borrar en silencio lo de la primera.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, JSON
from database import Base


class UserDocumentRecord(Base):
    """Un usuario = una fila con su documento JSON"""
    __tablename__ = "user_documents"

    email = Column(String(255), primary_key=True)
    schema_version = Column(Integer, default=2, nullable=False)
    version = Column(Integer, default=1, nullable=False)
    document = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class PlanTasksRecord(Base):
    """Lista completa de tareas de un plan (clave: plan + dueño)"""
    __tablename__ = "plan_tasks"

    plan_id = Column(String(64), primary_key=True)
    email = Column(String(255), primary_key=True)
    tasks = Column(JSON, nullable=False, default=list)
    task_count = Column(Integer, default=0)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
