"""
=============================================================================
VALIDATION.PY — Validación de Email y Teléfono
=============================================================================
Los usuarios de LockIn son sobre todo de Ghana, así que los teléfonos
se normalizan al prefijo internacional +233:

  +233 24 123 4567  →  +233241234567   (ya internacional)
  233 24 123 4567   →  +233241234567   (falta el +)
  024 123 4567      →  +233241234567   (formato local con 0)
  24 123 4567       →  +233241234567   (sin prefijo)
"""

import re
from typing import Optional

COUNTRY_PREFIX = "+233"

PHONE_SEPARATORS_RE = re.compile(r"[\s\-().]")


def normalize_email(email: str) -> str:
    """Clave primaria de los usuarios: email en minúsculas y sin espacios"""
    return (email or "").strip().lower()


def format_phone(phone: str) -> str:
    """Convierte cualquier formato al internacional +233..."""
    clean = PHONE_SEPARATORS_RE.sub("", (phone or "").strip())

    if clean.startswith(COUNTRY_PREFIX):
        return clean
    if clean.startswith(COUNTRY_PREFIX[1:]):
        return "+" + clean
    if clean.startswith("0"):
        return COUNTRY_PREFIX + clean[1:]
    return COUNTRY_PREFIX + clean


def phone_error(phone: Optional[str]) -> Optional[str]:
    """
    Devuelve el mensaje de error, o None si es válido.
    El teléfono es opcional: vacío también es válido.
    """
    if not phone or not phone.strip():
        return None

    clean = PHONE_SEPARATORS_RE.sub("", phone.strip())
    if not re.fullmatch(r"\+?\d+", clean):
        return "Phone number can only contain digits"

    digits = re.sub(r"\D", "", clean)
    if len(digits) < 9:
        return "Phone number is too short"
    if len(digits) > 15:
        return "Phone number is too long"
    return None


def phones_match(stored: str, given: str) -> bool:
    """Compara dos teléfonos ignorando el formato (login)"""
    if not stored or not given:
        return False
    return format_phone(stored) == format_phone(given)
