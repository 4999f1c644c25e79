import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models
from database import get_db
from errors import ValidationError
from repository import delete, get_or_404, insert, list_rows, update_fields
from schemas import RoleCreate, RoleRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/roles", tags=["Roles"])

ROLE_NOT_FOUND = "Rol no encontrado"


def _clean_name(rol: str) -> str:
    if not rol or not rol.strip():
        raise ValidationError("El rol es obligatorio")
    return rol.strip()


@router.get("/Listado", response_model=List[RoleRead])
def list_roles(db: Session = Depends(get_db)):
    return list_rows(db, models.Roles, order_by=models.Roles.id)


@router.get("/{role_id}", response_model=RoleRead)
def get_role(role_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, models.Roles, role_id, ROLE_NOT_FOUND)


@router.post("/Crear", status_code=201)
def create_role(payload: RoleCreate, db: Session = Depends(get_db)):
    role = insert(db, models.Roles(rol=_clean_name(payload.rol)), "El rol ya existe")
    return {"mensaje": "Rol creado correctamente", "id": role.id}


@router.put("/Actualizar/{role_id}")
def update_role(role_id: int, payload: RoleCreate, db: Session = Depends(get_db)):
    role = get_or_404(db, models.Roles, role_id, ROLE_NOT_FOUND)
    update_fields(db, role, {"rol": _clean_name(payload.rol)}, "El rol ya existe")
    return {"mensaje": "Rol actualizado correctamente"}


@router.delete("/Eliminar/{role_id}")
def delete_role(role_id: int, db: Session = Depends(get_db)):
    role = get_or_404(db, models.Roles, role_id, ROLE_NOT_FOUND)
    delete(db, role, "El rol está asignado a usuarios y no puede eliminarse")
    return {"mensaje": "Rol eliminado correctamente"}
