"""
Identity service: password hashing, role derivation and session tokens.

Passwords are hashed with bcrypt (cost factor from ``BCRYPT_ROUNDS``) and
sessions are HS256 JWTs that expire after ``TOKEN_EXPIRE_MINUTES``.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

import models
from config import ADMIN_EMAIL, BCRYPT_ROUNDS, JWT_ALGORITHM, JWT_SECRET, TOKEN_EXPIRE_MINUTES, VET_EMAIL
from database import get_db
from errors import NotFound, Unauthorized, ValidationError
from repository import first_row, insert
from schemas import RegisterRequest

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

bearer_scheme = HTTPBearer(auto_error=False)

MIN_PASSWORD_LENGTH = 8

ROLE_LABELS = {
    models.ROLE_ADMIN: "admin",
    models.ROLE_CLIENT: "cliente",
    models.ROLE_VET: "veterinario",
}


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        # hash corrupto o con formato desconocido
        logger.error(f"Password verification error: {e}")
        return False


def role_for_email(email: str) -> tuple[int, str]:
    """Reserved addresses pin the role; every other address is a client."""
    normalized = email.strip().lower()
    if normalized == ADMIN_EMAIL.lower():
        return models.ROLE_ADMIN, ROLE_LABELS[models.ROLE_ADMIN]
    if normalized == VET_EMAIL.lower():
        return models.ROLE_VET, ROLE_LABELS[models.ROLE_VET]
    return models.ROLE_CLIENT, ROLE_LABELS[models.ROLE_CLIENT]


def role_label(id_rol: int) -> str:
    return ROLE_LABELS.get(id_rol, "desconocido")


def create_access_token(data: dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jose_jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict[str, Any]]:
    try:
        return jose_jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None


def register(db: Session, data: RegisterRequest) -> tuple[models.Users, str]:
    """Create a user account and return it with its role label.

    Raises ``ValidationError`` when a field is missing, the password is too
    short or the email is already registered.
    """
    required = (data.n_documento, data.correoelectronico, data.contrasena, data.id_documento, data.nombre)
    if any(value is None or (isinstance(value, str) and not value.strip()) for value in required):
        raise ValidationError("Faltan campos")
    if len(data.contrasena) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres")

    if db.get(models.Users, data.n_documento):
        raise ValidationError("El documento ya está registrado")
    if first_row(db, models.Users, models.Users.correoelectronico == data.correoelectronico):
        raise ValidationError("El correo ya está registrado")

    id_rol, label = role_for_email(data.correoelectronico)
    user = models.Users(
        n_documento=data.n_documento,
        correoelectronico=data.correoelectronico,
        contrasena=hash_password(data.contrasena),
        id_documento=data.id_documento,
        nombre=data.nombre,
        id_rol=id_rol,
        estado="Activo",
    )
    insert(db, user, "Conflicto al registrar usuario")
    logger.info(f"Registered user {user.n_documento} with role {label}")
    return user, label


def authenticate(db: Session, email: str, password: str) -> tuple[models.Users, str, str]:
    """Check credentials and issue a session token.

    Returns ``(user, role_label, token)``.
    """
    user = first_row(db, models.Users, models.Users.correoelectronico == email)
    if not user:
        raise NotFound("Usuario no encontrado")
    if not verify_password(password, user.contrasena):
        logger.warning(f"Failed login for {user.n_documento}")
        raise Unauthorized("Contraseña incorrecta")

    token = create_access_token({"n_documento": user.n_documento, "nombre": user.nombre, "rol": user.id_rol})
    return user, role_label(user.id_rol), token


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> models.Users:
    if credentials is None:
        raise Unauthorized("Token requerido")
    claims = decode_access_token(credentials.credentials)
    if not claims or "n_documento" not in claims:
        raise Unauthorized("Token inválido o expirado")
    user = db.get(models.Users, claims["n_documento"])
    if not user or user.estado == "Suspendido":
        raise Unauthorized("Usuario no autorizado")
    return user
