import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models
import security
from database import get_db
from repository import list_rows
from schemas import DocumentTypeRead, LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, SessionUser

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Autenticación"])


@router.post("/registro", response_model=RegisterResponse, status_code=201)
def register_user(payload: RegisterRequest, db: Session = Depends(get_db)):
    _, label = security.register(db, payload)
    return {"mensaje": "Usuario registrado exitosamente", "rol": label}


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user, label, token = security.authenticate(db, payload.correoelectronico, payload.contrasena)
    logger.info(f"User {user.n_documento} logged in as {label}")
    return {
        "mensaje": "Inicio de sesión exitoso",
        "usuario": SessionUser(
            n_documento=user.n_documento,
            nombre=user.nombre,
            correoelectronico=user.correoelectronico,
            rol=user.id_rol,
        ),
        "rol": label,
        "token": token,
    }


@router.get("/tiposDocumento", response_model=List[DocumentTypeRead])
def list_document_types(db: Session = Depends(get_db)):
    return list_rows(db, models.DocumentTypes, order_by=models.DocumentTypes.id)
