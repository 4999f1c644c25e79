"""Read-only per-role summaries."""

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models
from database import get_db
from errors import NotFound
from repository import first_row, list_rows
from schemas import AppointmentWithLabels, PetWithLabels

router = APIRouter(tags=["Dashboards"])


def _user_with_role(db: Session, n_documento: str, id_rol: int, detail: str) -> models.Users:
    user = first_row(db, models.Users, models.Users.n_documento == n_documento, models.Users.id_rol == id_rol)
    if not user:
        raise NotFound(detail)
    return user


@router.get("/admin/dashboard")
def admin_dashboard(db: Session = Depends(get_db)):
    admin = first_row(db, models.Users, models.Users.id_rol == models.ROLE_ADMIN)
    if not admin:
        raise NotFound("No se encontró ningún admin")
    total = (
        db.query(models.Users)
        .filter(models.Users.id_rol.in_([models.ROLE_CLIENT, models.ROLE_VET]))
        .count()
    )
    return {
        "usuario": {"nombre": admin.nombre, "correo": admin.correoelectronico},
        "total_clientes": total,
    }


@router.get("/cliente/dashboard/{n_documento}")
def client_dashboard(n_documento: str, db: Session = Depends(get_db)):
    client = _user_with_role(db, n_documento, models.ROLE_CLIENT, "No se encontró el cliente")
    upcoming = list_rows(
        db,
        models.Appointments,
        models.Appointments.id_cliente == n_documento,
        models.Appointments.fecha >= datetime.utcnow(),
        order_by=models.Appointments.fecha,
    )
    pets = list_rows(db, models.Pets, models.Pets.id_cliente == n_documento, order_by=models.Pets.id)
    return {
        "usuario": {"nombre": client.nombre, "correoelectronico": client.correoelectronico},
        "citas_pendientes": [AppointmentWithLabels.model_validate(a) for a in upcoming],
        "mascotas": [PetWithLabels.model_validate(p) for p in pets],
    }


@router.get("/veterinario/dashboard/{n_documento}")
def veterinarian_dashboard(n_documento: str, db: Session = Depends(get_db)):
    # Devuelve todas las mascotas y citas del sistema, no solo las del veterinario
    vet = _user_with_role(db, n_documento, models.ROLE_VET, "No se encontró el veterinario")
    pets = list_rows(db, models.Pets, order_by=models.Pets.id)
    appointments = list_rows(db, models.Appointments, order_by=models.Appointments.fecha)
    return {
        "usuario": {"nombre": vet.nombre, "correoelectronico": vet.correoelectronico, "mascotas": len(pets)},
        "stats": {
            "mascotas_agregadas": len(pets),
            "citas_pendientes": len(appointments),
        },
        "mascotas": [PetWithLabels.model_validate(p) for p in pets],
        "citas_pendientes": [AppointmentWithLabels.model_validate(a) for a in appointments],
    }
