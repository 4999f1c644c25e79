import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models
from config import ADMIN_EMAIL
from database import get_db
from errors import ValidationError
from repository import first_row, get_or_404, insert, list_rows, update_fields
from schemas import UserCreate, UserRead, UserUpdate
from security import hash_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/usuario", tags=["Usuarios"])

USER_NOT_FOUND = "Usuario no encontrado"


def _check_admin_email(id_rol, email):
    # El rol Administrador solo se asigna al correo reservado
    if id_rol == models.ROLE_ADMIN and (email or "").lower() != ADMIN_EMAIL.lower():
        raise ValidationError("Solo se permite el correo predeterminado para rol Administrador")


def _check_role(db: Session, id_rol):
    if id_rol is not None and not db.get(models.Roles, id_rol):
        raise ValidationError("Rol no encontrado")


@router.get("/Listado", response_model=List[UserRead])
def list_users(db: Session = Depends(get_db)):
    return list_rows(db, models.Users, models.Users.estado != "Suspendido", order_by=models.Users.nombre)


@router.get("/{n_documento}", response_model=UserRead)
def get_user(n_documento: str, db: Session = Depends(get_db)):
    return get_or_404(db, models.Users, n_documento, USER_NOT_FOUND)


@router.post("/Crear", status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    _check_admin_email(payload.id_rol, payload.correoelectronico)
    _check_role(db, payload.id_rol)
    if db.get(models.Users, payload.n_documento):
        raise ValidationError("El documento ya está registrado")
    if first_row(db, models.Users, models.Users.correoelectronico == payload.correoelectronico):
        raise ValidationError("El correo ya está registrado")

    data = payload.model_dump()
    data["contrasena"] = hash_password(data["contrasena"])
    user = insert(db, models.Users(**data, estado="Activo"), "Conflicto al registrar usuario")
    logger.info(f"Created user {user.n_documento} with role {user.id_rol}")
    return {"mensaje": "Usuario registrado correctamente", "n_documento": user.n_documento}


@router.put("/Actualizar/{n_documento}")
def update_user(n_documento: str, payload: UserUpdate, db: Session = Depends(get_db)):
    user = get_or_404(db, models.Users, n_documento, USER_NOT_FOUND)
    values = payload.model_dump(exclude_unset=True)
    _check_admin_email(values.get("id_rol", user.id_rol), values.get("correoelectronico", user.correoelectronico))
    _check_role(db, values.get("id_rol"))
    values["estado"] = "Activo"
    update_fields(db, user, values, "El correo ya está registrado")
    return {"mensaje": "Usuario actualizado correctamente"}


def _set_status(db: Session, n_documento: str, estado: str):
    user = get_or_404(db, models.Users, n_documento, USER_NOT_FOUND)
    update_fields(db, user, {"estado": estado})
    logger.info(f"User {n_documento} set to {estado}")


@router.put("/Suspender/{n_documento}")
def suspend_user(n_documento: str, db: Session = Depends(get_db)):
    _set_status(db, n_documento, "Suspendido")
    return {"mensaje": "Usuario suspendido correctamente"}


@router.put("/Reactivar/{n_documento}")
def reactivate_user(n_documento: str, db: Session = Depends(get_db)):
    _set_status(db, n_documento, "Activo")
    return {"mensaje": "Usuario reactivado correctamente"}


@router.put("/Pendiente/{n_documento}")
def set_user_pending(n_documento: str, db: Session = Depends(get_db)):
    _set_status(db, n_documento, "Pendiente")
    return {"mensaje": "Usuario puesto en estado pendiente correctamente"}
