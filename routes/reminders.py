import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models
from database import get_db
from repository import delete, get_or_404, insert, list_rows, update_fields
from schemas import ReminderCreate, ReminderWithPet
from workflow import validate_reminder_refs

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Recordatorios"])

REMINDER_NOT_FOUND = "Recordatorio no encontrado"


@router.get("/recordatorios", response_model=List[ReminderWithPet])
def list_reminders(db: Session = Depends(get_db)):
    return list_rows(db, models.Reminders, order_by=models.Reminders.fecha)


@router.get("/recordatorio/mascota/{pet_id}", response_model=List[ReminderWithPet])
def list_pet_reminders(pet_id: int, db: Session = Depends(get_db)):
    return list_rows(db, models.Reminders, models.Reminders.id_mascota == pet_id, order_by=models.Reminders.fecha)


@router.post("/recordatorios/guardar", status_code=201)
def create_reminder(payload: ReminderCreate, db: Session = Depends(get_db)):
    validate_reminder_refs(db, payload.cliente, payload.mascota)
    row = insert(
        db,
        models.Reminders(
            id_cliente=payload.cliente,
            id_mascota=payload.mascota,
            fecha=payload.fecha,
            descripcion=payload.descripcion,
            estado="Activo",
        ),
        "Conflicto al guardar el recordatorio",
    )
    logger.info(f"Reminder {row.id} saved for pet {row.id_mascota}")
    return {"mensaje": "Recordatorio guardado correctamente", "id": row.id}


@router.put("/recordatorios/modificar/{reminder_id}")
def update_reminder(reminder_id: int, payload: ReminderCreate, db: Session = Depends(get_db)):
    row = get_or_404(db, models.Reminders, reminder_id, REMINDER_NOT_FOUND)
    validate_reminder_refs(db, payload.cliente, payload.mascota)
    update_fields(
        db,
        row,
        {
            "id_cliente": payload.cliente,
            "id_mascota": payload.mascota,
            "fecha": payload.fecha,
            "descripcion": payload.descripcion,
        },
    )
    return {"mensaje": "Recordatorio actualizado correctamente"}


@router.delete("/recordatorios/eliminar/{reminder_id}")
def delete_reminder(reminder_id: int, db: Session = Depends(get_db)):
    row = get_or_404(db, models.Reminders, reminder_id, REMINDER_NOT_FOUND)
    delete(db, row)
    return {"mensaje": "Recordatorio eliminado correctamente"}
