import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models
from database import get_db
from repository import delete, get_or_404, insert, list_rows, update_fields
from schemas import AppointmentCreate, AppointmentRead, AppointmentUpdate, AppointmentWithLabels
from workflow import INITIAL_APPOINTMENT_STATUS, transition_appointment, validate_appointment_refs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Citas", tags=["Citas"])

APPOINTMENT_NOT_FOUND = "Cita no encontrada"


@router.get("/Listado", response_model=List[AppointmentWithLabels])
def list_appointments(db: Session = Depends(get_db)):
    return list_rows(db, models.Appointments, order_by=models.Appointments.fecha.desc())


@router.get("/mascota/{pet_id}", response_model=List[AppointmentWithLabels])
def list_pet_appointments(pet_id: int, db: Session = Depends(get_db)):
    get_or_404(db, models.Pets, pet_id, "Mascota no encontrada")
    return list_rows(db, models.Appointments, models.Appointments.id_mascota == pet_id, order_by=models.Appointments.fecha)


@router.get("/{appointment_id}", response_model=AppointmentWithLabels)
def get_appointment(appointment_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, models.Appointments, appointment_id, APPOINTMENT_NOT_FOUND)


@router.post("/Registrar", status_code=201)
def create_appointment(payload: AppointmentCreate, db: Session = Depends(get_db)):
    validate_appointment_refs(db, payload.id_cliente, payload.id_mascota, payload.id_veterinario, payload.id_servicio)
    new = insert(
        db,
        models.Appointments(**payload.model_dump(), estado=INITIAL_APPOINTMENT_STATUS),
        "Conflicto al registrar la cita",
    )
    logger.info(f"Appointment {new.id} registered for pet {new.id_mascota}")
    return {"mensaje": "Cita registrada correctamente", "id": new.id, "resultado": AppointmentRead.model_validate(new)}


@router.put("/Actualizar/{appointment_id}")
def update_appointment(appointment_id: int, payload: AppointmentUpdate, db: Session = Depends(get_db)):
    a = get_or_404(db, models.Appointments, appointment_id, "Cita no encontrada para actualizar")
    values = payload.model_dump(exclude_unset=True)
    target = values.pop("estado", None)
    if target is not None:
        transition_appointment(a, target)
    update_fields(db, a, values, clearable=("descripcion",))
    return {"mensaje": "Cita actualizada correctamente", "resultado": AppointmentRead.model_validate(a)}


def _change_status(db: Session, appointment_id: int, target: str) -> models.Appointments:
    a = get_or_404(db, models.Appointments, appointment_id, APPOINTMENT_NOT_FOUND)
    transition_appointment(a, target)
    db.commit()
    db.refresh(a)
    logger.info(f"Appointment {appointment_id} is now {target}")
    return a


@router.put("/Confirmar/{appointment_id}")
def confirm_appointment(appointment_id: int, db: Session = Depends(get_db)):
    a = _change_status(db, appointment_id, "Confirmado")
    return {"mensaje": "Cita confirmada correctamente", "resultado": AppointmentRead.model_validate(a)}


@router.put("/Cancelar/{appointment_id}")
def cancel_appointment(appointment_id: int, db: Session = Depends(get_db)):
    a = _change_status(db, appointment_id, "Cancelado")
    return {"mensaje": "Cita cancelada correctamente", "resultado": AppointmentRead.model_validate(a)}


@router.put("/Pendiente/{appointment_id}")
def set_appointment_pending(appointment_id: int, db: Session = Depends(get_db)):
    a = _change_status(db, appointment_id, "Pendiente")
    return {"mensaje": "Cita actualizada a pendiente correctamente", "resultado": AppointmentRead.model_validate(a)}


@router.delete("/Eliminar/{appointment_id}")
def delete_appointment(appointment_id: int, db: Session = Depends(get_db)):
    a = get_or_404(db, models.Appointments, appointment_id, APPOINTMENT_NOT_FOUND)
    delete(db, a)
    return {"mensaje": "Cita eliminada correctamente"}
