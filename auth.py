"""
=============================================================================
AUTH.PY — Sesiones con JWT
=============================================================================
Gestiona:
  - Creación y verificación de tokens JWT
  - Obtener el email del usuario actual desde un token

LockIn no tiene contraseñas: el login es email + teléfono (el teléfono
se guarda tal cual porque hace falta para enviar SMS). Tras el login
o el registro, el servidor devuelve un JWT y la web lo envía en cada
petición:

    Authorization: Bearer eyJ...

El "sub" del token es el email del usuario (la clave de su documento).
"""

import os
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from validation import normalize_email

# ─────────────────────────────────────────────────────────────────────────────
# CONFIGURACIÓN
# ─────────────────────────────────────────────────────────────────────────────

SECRET_KEY = os.getenv("SECRET_KEY", "lockin-dev-secret-key-cambiar-en-produccion")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", "30"))


# ─────────────────────────────────────────────────────────────────────────────
# TOKENS JWT
# ─────────────────────────────────────────────────────────────────────────────

def create_access_token(email: str, name: str = "") -> str:
    """sub = email, name = para mostrar, exp = caducidad"""
    expire = datetime.utcnow() + timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS)
    to_encode = {
        "sub": normalize_email(email),
        "name": name,
        "exp": expire,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """Datos del token, o None si es inválido o ha caducado"""
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None


# ─────────────────────────────────────────────────────────────────────────────
# DEPENDENCIA: EMAIL DEL USUARIO ACTUAL
# ─────────────────────────────────────────────────────────────────────────────
# auto_error=False → sin cabecera devolvemos nuestro propio 401
# (HTTPBearer por defecto responde 403).

security = HTTPBearer(auto_error=False)


async def get_current_email(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """
    Se usa así en los endpoints:
      @app.get("/api/plans")
      def list_plans(email: str = Depends(get_current_email)):
          ...
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_token(credentials.credentials)
    if payload is None or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload["sub"]


async def get_optional_email(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """Como get_current_email, pero sin token devuelve None en vez de 401"""
    if credentials is None:
        return None
    payload = decode_token(credentials.credentials)
    return payload.get("sub") if payload else None
