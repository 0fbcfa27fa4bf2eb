"""
=============================================================================
NOTIFICATIONS.PY — SMS (Arkesel) y Email (Resend)
=============================================================================
Funciones:
  1. Enviar un SMS o un email (devuelven True/False, nunca lanzan)
  2. Plantillas por tipo de aviso: reminder, missed-checkin,
     streak-warning, achievement, weekly-summary
  3. Bienvenida al crear el primer plan
  4. Recordatorio masivo a quien no ha hecho check-in hoy

Sin API key configurada, el envío se registra en el log y devuelve False.
"""

import os
import logging
from datetime import date
from html import escape
from typing import Optional

import httpx
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from schemas import NotificationType, UserDocumentV2
from store import scan_all_users
from validation import format_phone

logger = logging.getLogger("lockin.notifications")

# ─────────────────────────────────────────────────────────────────────────────
# CONFIGURACIÓN
# ─────────────────────────────────────────────────────────────────────────────

ARKESEL_API_KEY = os.getenv("ARKESEL_API_KEY", "")
ARKESEL_SENDER_ID = os.getenv("ARKESEL_SENDER_ID", "LockIn")
ARKESEL_URL = "https://sms.arkesel.com/sms/api"
ARKESEL_V2_URL = "https://sms.arkesel.com/api/v2/sms/send"

RESEND_API_KEY = os.getenv("RESEND_API_KEY", "")
RESEND_URL = "https://api.resend.com/emails"
EMAIL_FROM = os.getenv("EMAIL_FROM", "LockIn <onboarding@resend.dev>")

APP_URL = os.getenv("APP_URL", "http://localhost:3000")

HTTP_TIMEOUT = 15.0


class NotificationError(Exception):
    """El proveedor rechazó el envío (solo para /api/send-sms)"""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# =============================================================================
# ===================== PLANTILLAS ============================================
# =============================================================================

SMS_MESSAGES = {
    NotificationType.reminder: "🎯 LockIn: Time to learn! Your tasks are ready.",
    NotificationType.missed_checkin: "🔥 LockIn: Don't break your streak! Check in now.",
    NotificationType.streak_warning: "⚠️ LockIn: Streak at risk! Complete a task now.",
    NotificationType.achievement: "🎉 LockIn: New achievement unlocked!",
    NotificationType.weekly_summary: "📊 LockIn: Your weekly summary is ready.",
}

EMAIL_SUBJECTS = {
    NotificationType.reminder: "🎯 Time to LockIn!",
    NotificationType.missed_checkin: "🔥 Don't break your streak!",
    NotificationType.streak_warning: "⚠️ Your streak is at risk!",
    NotificationType.achievement: "🎉 Achievement Unlocked!",
    NotificationType.weekly_summary: "📊 Your Weekly Progress Report",
}

EMAIL_BODIES = {
    NotificationType.reminder: (
        "Time to LockIn! 🎯",
        "Your daily learning tasks are ready and waiting. Keep the momentum going!",
        "Small consistent steps lead to big results. Let's make today count.",
    ),
    NotificationType.missed_checkin: (
        "Don't Break Your Streak! 🔥",
        "We noticed you haven't checked in today. Your streak is at risk!",
        "Even completing one small task keeps you on track. Jump back in now!",
    ),
    NotificationType.streak_warning: (
        "Streak Alert! ⚠️",
        "Your learning streak is about to break! Check in before midnight to keep it alive.",
        "Remember: consistency beats intensity. Just show up!",
    ),
    NotificationType.achievement: (
        "Congratulations! 🎉",
        "You've unlocked a new achievement! Your hard work is paying off.",
        "Keep pushing forward!",
    ),
    NotificationType.weekly_summary: (
        "Your Weekly Progress 📊",
        "Great work this week! Here's a summary of your learning journey.",
        "Keep up the momentum!",
    ),
}

EMAIL_LAYOUT = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <style>
    body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
    .header {{ background: linear-gradient(135deg, #14b8a6, #10b981); color: white; padding: 20px; border-radius: 12px 12px 0 0; }}
    .content {{ background: #f9fafb; padding: 20px; border-radius: 0 0 12px 12px; }}
    .button {{ display: inline-block; background: #14b8a6; color: white; padding: 12px 24px; border-radius: 8px; text-decoration: none; margin-top: 15px; }}
    .footer {{ text-align: center; color: #888; font-size: 12px; margin-top: 20px; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>🎯 LockIn</h1>
      <p>{greeting}</p>
    </div>
    <div class="content">
      {content}
      <a href="{app_url}" class="button">Open LockIn</a>
    </div>
    <div class="footer">
      <p>You're receiving this because you enabled notifications in LockIn.</p>
    </div>
  </div>
</body>
</html>"""


def first_name(name: Optional[str]) -> str:
    return (name or "").strip().split(" ")[0] if name and name.strip() else ""


def sms_message(kind: NotificationType, custom_message: Optional[str] = None) -> str:
    return custom_message or SMS_MESSAGES.get(kind, "📱 LockIn: You have a notification.")


def email_subject(kind: NotificationType) -> str:
    return EMAIL_SUBJECTS.get(kind, "📱 LockIn Notification")


def email_html(kind: NotificationType, name: Optional[str] = None) -> str:
    if kind in EMAIL_BODIES:
        title, line1, line2 = EMAIL_BODIES[kind]
        content = f"<h2>{title}</h2>\n      <p>{line1}</p>\n      <p>{line2}</p>"
    else:
        content = "<h2>LockIn Notification 📱</h2><p>You have a new notification.</p>"
    greeting = f"Hey {name}!" if name else "Hey there!"
    return EMAIL_LAYOUT.format(greeting=greeting, content=content, app_url=APP_URL)


def welcome_sms(name: Optional[str], plan_title: str, start_date: Optional[date]) -> str:
    who = first_name(name)
    starts = f"{start_date:%b} {start_date.day}, {start_date.year}" if start_date else "soon"
    return f'🚀 {who + ", " if who else ""}Your LockIn plan is ready! "{plan_title}" starts {starts}. Let\'s go! 💪 - LockIn'


def welcome_email_html(name: Optional[str], plan_title: str, start_date: Optional[date]) -> str:
    starts = f"{start_date:%B} {start_date.day}, {start_date.year}" if start_date else "soon"
    content = (
        "<h2>Your plan is ready! 🚀</h2>\n"
        f"      <p><strong>{escape(plan_title)}</strong> starts {starts}.</p>\n"
        "      <p>Check in every day, complete your tasks and watch your streak grow.</p>"
    )
    return EMAIL_LAYOUT.format(greeting=f"Hey {name or 'there'}!", content=content, app_url=APP_URL)


def plan_summary_email_html(name: Optional[str], subject: str, plan_summary: Optional[str]) -> str:
    content = (
        f"<h2>{escape(subject)}</h2>\n"
        "      <p>Your personalized learning plan has been created! Here's your journey ahead:</p>\n"
        f"      <pre style=\"white-space: pre-wrap;\">{escape(plan_summary or 'Your plan is ready to view in the app.')}</pre>"
    )
    return EMAIL_LAYOUT.format(greeting=f"Hey {name}!" if name else "Hey there!", content=content, app_url=APP_URL)


# =============================================================================
# ===================== ENVÍO =================================================
# =============================================================================

def _response_json(response: httpx.Response) -> dict:
    """Cuerpo JSON del proveedor. Si no es un objeto cuenta como vacío (envío fallido)"""
    data = response.json()
    return data if isinstance(data, dict) else {}


async def send_sms(phone: str, message: str) -> bool:
    """SMS por la API clásica de Arkesel (GET). True si el proveedor lo acepta"""
    if not ARKESEL_API_KEY:
        logger.warning("⚠️ ARKESEL_API_KEY no configurada, SMS no enviado")
        return False

    to = format_phone(phone)
    params = {
        "action": "send-sms",
        "api_key": ARKESEL_API_KEY,
        "to": to,
        "from": ARKESEL_SENDER_ID,
        "sms": message,
    }
    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as client:
            response = await client.get(ARKESEL_URL, params=params)
        data = _response_json(response)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"❌ Error enviando SMS a {to}: {e}")
        return False

    if data.get("code") == "ok" or data.get("status") == "success":
        logger.info(f"📱 SMS enviado a {to}")
        return True
    logger.error(f"❌ Arkesel rechazó el SMS a {to}: {data.get('message', 'Unknown error')}")
    return False


async def send_sms_v2(to: str, message: str) -> dict:
    """
    SMS por la API v2 de Arkesel (POST). Devuelve la respuesta del
    proveedor; lanza NotificationError con su código HTTP si falla.
    """
    if not ARKESEL_API_KEY:
        raise NotificationError("Arkesel API key not configured", 500)

    payload = {"sender": ARKESEL_SENDER_ID, "recipients": [format_phone(to)], "message": message}
    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as client:
            response = await client.post(ARKESEL_V2_URL, json=payload, headers={"api-key": ARKESEL_API_KEY})
        data = _response_json(response)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"❌ Error enviando SMS (v2): {e}")
        raise NotificationError("Failed to send SMS", 500) from e

    if response.is_error:
        raise NotificationError(data.get("message") or "Failed to send SMS", response.status_code)
    if not data:
        raise NotificationError("Failed to send SMS", 502)
    return data


async def send_email(to: str, subject: str, html: str) -> bool:
    """Email por Resend. True si devuelve un id"""
    if not RESEND_API_KEY:
        logger.warning("⚠️ RESEND_API_KEY no configurada, email no enviado")
        return False

    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as client:
            response = await client.post(
                RESEND_URL,
                json={"from": EMAIL_FROM, "to": to, "subject": subject, "html": html},
                headers={"Authorization": f"Bearer {RESEND_API_KEY}"},
            )
        data = _response_json(response)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"❌ Error enviando email a {to}: {e}")
        return False

    if data.get("id"):
        logger.info(f"📧 Email enviado a {to}")
        return True
    logger.error(f"❌ Resend rechazó el email a {to}: {data}")
    return False


def email_configured() -> bool:
    return bool(RESEND_API_KEY)


# =============================================================================
# ===================== AVISOS ================================================
# =============================================================================

async def notify_user(kind: NotificationType, email: Optional[str] = None, phone: Optional[str] = None,
                      name: Optional[str] = None, custom_message: Optional[str] = None) -> dict:
    """Aviso a un destinatario. Solo aparecen en el resultado los canales usados"""
    results = {}
    if phone:
        results["sms"] = await send_sms(phone, sms_message(kind, custom_message))
    if email:
        results["email"] = await send_email(email, email_subject(kind), email_html(kind, name))
    return results


async def send_welcome(email: Optional[str], phone: Optional[str], name: Optional[str],
                       plan_title: str, start_date: Optional[date] = None) -> dict:
    results = {"sms": False, "email": False}
    if phone:
        results["sms"] = await send_sms(phone, welcome_sms(name, plan_title, start_date))
    if email:
        results["email"] = await send_email(
            email, "🚀 Your LockIn Plan is Ready!", welcome_email_html(name, plan_title, start_date)
        )
    logger.info(f"👋 Bienvenida '{plan_title}': {results}")
    return results


def checked_in_on(doc: UserDocumentV2, day: date) -> bool:
    """¿Hay check-in ese día en algún plan no archivado?"""
    key = day.isoformat()
    return any(p.daily_check_ins.get(key) for p in doc.plans if not p.is_archived)


def needs_reminder(doc: UserDocumentV2, day: date) -> bool:
    if checked_in_on(doc, day):
        return False
    wants_sms = bool(doc.phone_number) and doc.settings.sms_notifications
    wants_email = bool(doc.email) and doc.settings.email_notifications
    return wants_sms or wants_email


def pending_reminders(db: Session, today: date) -> list[UserDocumentV2]:
    """Lectura síncrona de la BD: se ejecuta fuera del event loop"""
    return [u.document for u in scan_all_users(db) if needs_reminder(u.document, today)]


async def send_batch_reminders(db: Session, today: Optional[date] = None) -> dict:
    """
    Recordatorio a todos los usuarios sin check-in hoy que tengan
    teléfono o email (y el canal activado en sus ajustes).

    Devuelve {total, smsSent, emailSent, failed}
    """
    today = today or date.today()
    results = {"total": 0, "smsSent": 0, "emailSent": 0, "failed": 0}

    pending = await run_in_threadpool(pending_reminders, db, today)
    results["total"] = len(pending)

    for doc in pending:
        if doc.phone_number and doc.settings.sms_notifications:
            who = first_name(doc.name)
            message = f"🔥 {who + ', ' if who else ''}Don't break your streak! Check in now. - LockIn"
            if await send_sms(doc.phone_number, message):
                results["smsSent"] += 1
            else:
                results["failed"] += 1

        if doc.email and doc.settings.email_notifications:
            html = email_html(NotificationType.missed_checkin, doc.name)
            if await send_email(doc.email, email_subject(NotificationType.missed_checkin), html):
                results["emailSent"] += 1
            else:
                results["failed"] += 1

    logger.info(f"📬 Recordatorio masivo {today}: {results}")
    return results
