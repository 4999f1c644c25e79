import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

import models
from database import get_db
from errors import ValidationError
from repository import delete, get_or_404, insert, list_rows, update_fields
from schemas import SpeciesRead
from storage import MediaStorage, get_storage, ingest_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Especies", tags=["Especies"])

SPECIES_NOT_FOUND = "Especie no encontrada"
IMAGE_FOLDER = "especies"


def _clean_name(especie: str) -> str:
    if not especie or not especie.strip():
        raise ValidationError("El nombre de la especie es obligatorio")
    return especie.strip()


@router.get("/Listado", response_model=List[SpeciesRead])
def list_species(db: Session = Depends(get_db)):
    return list_rows(db, models.Species, order_by=models.Species.id)


@router.get("/{species_id}", response_model=SpeciesRead)
def get_species(species_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, models.Species, species_id, SPECIES_NOT_FOUND)


@router.post("/Crear", status_code=201)
async def create_species(
    especie: Optional[str] = Form(None, alias="Especie"),
    imagen: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_storage),
):
    nombre = _clean_name(especie)
    imagen_url = await ingest_image(storage, IMAGE_FOLDER, imagen)
    row = insert(db, models.Species(especie=nombre, imagen=imagen_url), "Conflicto al crear especie")
    logger.info(f"Created species {row.id}")
    return {"mensaje": "Especie creada", "id": row.id, "data": SpeciesRead.model_validate(row)}


@router.put("/Actualizar/{species_id}")
async def update_species(
    species_id: int,
    especie: Optional[str] = Form(None, alias="Especie"),
    imagen: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_storage),
):
    row = get_or_404(db, models.Species, species_id, SPECIES_NOT_FOUND)
    nombre = _clean_name(especie) if especie is not None else None
    imagen_url = await ingest_image(storage, IMAGE_FOLDER, imagen)
    update_fields(db, row, {"especie": nombre, "imagen": imagen_url})
    return {"mensaje": "Especie actualizada", "data": SpeciesRead.model_validate(row)}


@router.delete("/Eliminar/{species_id}")
def delete_species(species_id: int, db: Session = Depends(get_db)):
    row = get_or_404(db, models.Species, species_id, "No hay especie con ese ID")
    data = SpeciesRead.model_validate(row)
    delete(db, row, "La especie tiene mascotas registradas y no puede eliminarse")
    return {"mensaje": "Especie eliminada", "data": data}
