"""
Appointment and reminder rules.

Appointments follow Pendiente -> Confirmado -> Cancelado (Pendiente may also
go straight to Cancelado). Cancelado is terminal. Cross-entity checks run
before any write; they are separate reads, not one transaction.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

import models
from errors import ValidationError

logger = logging.getLogger(__name__)

INITIAL_APPOINTMENT_STATUS = "Pendiente"

APPOINTMENT_TRANSITIONS = {
    "Pendiente": {"Confirmado", "Cancelado"},
    "Confirmado": {"Cancelado"},
    "Cancelado": set(),
}


def can_transition(current: str, target: str) -> bool:
    return target in APPOINTMENT_TRANSITIONS.get(current, set())


def transition_appointment(appointment: models.Appointments, target: str) -> models.Appointments:
    """Move ``appointment`` to ``target`` or raise ``ValidationError``. Caller commits."""
    if not can_transition(appointment.estado, target):
        logger.warning(f"Rejected appointment {appointment.id} transition {appointment.estado} -> {target}")
        raise ValidationError(f"La cita no puede pasar de {appointment.estado} a {target}")
    appointment.estado = target
    return appointment


def check_client(db: Session, n_documento: str) -> models.Users:
    client = db.get(models.Users, n_documento)
    if not client:
        raise ValidationError("Cliente no existe")
    return client


def check_pet_owner(db: Session, id_mascota: int, n_documento: str) -> models.Pets:
    pet = db.get(models.Pets, id_mascota)
    if not pet or pet.id_cliente != n_documento:
        raise ValidationError("Mascota no coincide con cliente")
    return pet


def validate_reminder_refs(db: Session, n_documento: str, id_mascota: int) -> models.Pets:
    """The client must exist and own the pet."""
    check_client(db, n_documento)
    return check_pet_owner(db, id_mascota, n_documento)


def validate_appointment_refs(
    db: Session,
    n_documento: str,
    id_mascota: int,
    id_veterinario: Optional[int] = None,
    id_servicio: Optional[int] = None,
) -> models.Pets:
    client = check_client(db, n_documento)
    if client.estado == "Suspendido":
        raise ValidationError("El cliente está suspendido")
    pet = check_pet_owner(db, id_mascota, n_documento)
    if pet.estado == "Suspendido":
        raise ValidationError("La mascota está suspendida")
    if id_veterinario is not None:
        vet = db.get(models.Veterinarians, id_veterinario)
        if not vet or not vet.activo:
            raise ValidationError("Veterinario no encontrado")
    if id_servicio is not None and not db.get(models.Services, id_servicio):
        raise ValidationError("Servicio no encontrado")
    return pet
