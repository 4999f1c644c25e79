from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models
from database import get_db
from errors import ValidationError
from repository import delete, get_or_404, insert, list_rows, update_fields
from schemas import DiseaseCreate, DiseaseRead, DiseaseUpdate

router = APIRouter(prefix="/Enfermedades", tags=["Enfermedades"])

DISEASE_NOT_FOUND = "No se encontró la enfermedad"


def _blank(value) -> bool:
    return value is None or not value.strip()


@router.get("/Listado", response_model=List[DiseaseRead])
def list_diseases(db: Session = Depends(get_db)):
    return list_rows(db, models.Diseases, order_by=models.Diseases.id)


@router.get("/{disease_id}", response_model=DiseaseRead)
def get_disease(disease_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, models.Diseases, disease_id, DISEASE_NOT_FOUND)


@router.post("/Registrar", status_code=201)
def create_disease(payload: DiseaseCreate, db: Session = Depends(get_db)):
    if _blank(payload.nombre) or _blank(payload.descripcion):
        raise ValidationError("Nombre y descripción son requeridos")
    row = insert(db, models.Diseases(nombre=payload.nombre.strip(), descripcion=payload.descripcion.strip()))
    return {"mensaje": "Enfermedad registrada correctamente", "id": row.id, "resultado": DiseaseRead.model_validate(row)}


@router.put("/Actualizar/{disease_id}")
def update_disease(disease_id: int, payload: DiseaseUpdate, db: Session = Depends(get_db)):
    if _blank(payload.nombre) and _blank(payload.descripcion):
        raise ValidationError("Debe enviar nombre o descripción para actualizar")
    row = get_or_404(db, models.Diseases, disease_id, DISEASE_NOT_FOUND)
    values = {k: v.strip() for k, v in payload.model_dump().items() if not _blank(v)}
    update_fields(db, row, values)
    return {"mensaje": "Enfermedad actualizada correctamente", "resultado": DiseaseRead.model_validate(row)}


@router.delete("/Eliminar/{disease_id}")
def delete_disease(disease_id: int, db: Session = Depends(get_db)):
    row = get_or_404(db, models.Diseases, disease_id, DISEASE_NOT_FOUND)
    data = DiseaseRead.model_validate(row)
    delete(db, row)
    return {"mensaje": "Enfermedad eliminada correctamente", "resultado": data}
