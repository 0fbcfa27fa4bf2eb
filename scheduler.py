"""
=============================================================================
SCHEDULER.PY — Tareas Automáticas
=============================================================================
En vez de esperar a que el usuario abra la web, LockIn le busca a él.

Tareas:
  1. Recordatorio diario (por defecto 09:00 Africa/Accra) por SMS y email
     a quien todavía no ha hecho check-in hoy
  2. Barrido de rachas (00:05): si el último check-in de un plan fue
     hace más de un día, su racha pasa a 0

Usa APScheduler con CronTrigger en la zona horaria configurada.
"""

import os
import logging
from datetime import date, datetime
from typing import Optional

import pytz
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from database import SessionLocal
from notifications import send_batch_reminders
from progress import ProgressStore
from store import StoreError, recompute_global_stats, save_user, scan_all_users

logger = logging.getLogger("lockin.scheduler")

# ─────────────────────────────────────────────────────────────────────────────
# CONFIGURACIÓN
# ─────────────────────────────────────────────────────────────────────────────

REMINDER_HOUR = int(os.getenv("LOCKIN_REMINDER_HOUR", "9"))
REMINDER_MINUTE = int(os.getenv("LOCKIN_REMINDER_MINUTE", "0"))
TIMEZONE = os.getenv("LOCKIN_TIMEZONE", "Africa/Accra")
SCHEDULER_ENABLED = os.getenv("LOCKIN_SCHEDULER_ENABLED", "true").lower() in ("1", "true", "yes")

scheduler: AsyncIOScheduler = None


def local_today(tz_name: Optional[str] = None) -> date:
    """Fecha de hoy en la zona horaria indicada (o la del servidor de LockIn)"""
    try:
        tz = pytz.timezone(tz_name or TIMEZONE)
    except pytz.UnknownTimeZoneError:
        logger.warning(f"⚠️ Zona horaria desconocida '{tz_name}', usando {TIMEZONE}")
        tz = pytz.timezone(TIMEZONE)
    return datetime.now(tz).date()


# =============================================================================
# ===================== RECORDATORIO DIARIO ===================================
# =============================================================================

async def daily_reminder():
    """Recordatorio masivo a los usuarios sin check-in hoy"""
    db = SessionLocal()
    try:
        results = await send_batch_reminders(db, local_today())
        logger.info(
            f"⏰ Recordatorio diario: {results['total']} usuarios, "
            f"{results['smsSent']} SMS, {results['emailSent']} emails, {results['failed']} fallidos"
        )
    except Exception as e:
        logger.error(f"❌ Error en el recordatorio diario: {e}")
    finally:
        db.close()


# =============================================================================
# ===================== BARRIDO DE RACHAS =====================================
# =============================================================================

def streak_sweep(today: Optional[date] = None) -> int:
    """
    Pone a 0 las rachas rotas de todos los planes activos.
    Cada usuario usa su propia zona horaria. Devuelve cuántos planes cambiaron.
    """
    db = SessionLocal()
    reset = 0
    try:
        for user in scan_all_users(db):
            doc = user.document
            try:
                user_today = today or local_today(doc.settings.timezone)
                changed = [
                    p.plan_id for p in doc.plans
                    if not p.is_archived and ProgressStore(p).check_streak_reset(user_today)
                ]
                if not changed and not user.upgraded:
                    continue

                recompute_global_stats(doc)
                save_user(db, user)
                reset += len(changed)
                if changed:
                    logger.info(f"💔 Racha a 0: {doc.email} ({len(changed)} planes)")

            except StoreError as e:
                logger.error(f"Error en streak_sweep para {doc.email}: {e}")
    finally:
        db.close()

    return reset


async def streak_sweep_job():
    count = streak_sweep()
    logger.info(f"🌙 Barrido de rachas terminado: {count} planes a 0")


# =============================================================================
# ===================== INICIALIZAR SCHEDULER =================================
# =============================================================================

def create_scheduler() -> AsyncIOScheduler:
    """
    Tareas:
      - REMINDER_HOUR:REMINDER_MINUTE → recordatorio diario
      - 00:05 → barrido de rachas
    """
    global scheduler

    tz = pytz.timezone(TIMEZONE)
    scheduler = AsyncIOScheduler(timezone=tz)

    scheduler.add_job(
        daily_reminder,
        CronTrigger(hour=REMINDER_HOUR, minute=REMINDER_MINUTE, timezone=tz),
        id="daily_reminder",
        name="Recordatorio diario de check-in",
        replace_existing=True,
    )

    scheduler.add_job(
        streak_sweep_job,
        CronTrigger(hour=0, minute=5, timezone=tz),
        id="streak_sweep",
        name="Barrido de rachas",
        replace_existing=True,
    )

    logger.info(f"⏰ Scheduler configurado: recordatorio {REMINDER_HOUR:02d}:{REMINDER_MINUTE:02d} + barrido 00:05 ({TIMEZONE})")
    return scheduler


def start_scheduler():
    global scheduler
    if scheduler and not scheduler.running:
        scheduler.start()
        logger.info("⏰ Scheduler arrancado")


def stop_scheduler():
    global scheduler
    if scheduler and scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("⏰ Scheduler parado")
