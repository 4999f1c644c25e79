import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

import models
from database import get_db
from errors import ValidationError
from repository import delete, get_or_404, insert, list_rows, update_fields
from schemas import BreedRead
from storage import MediaStorage, get_storage, ingest_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Razas", tags=["Razas"])

BREED_NOT_FOUND = "Raza no encontrada"
IMAGE_FOLDER = "razas"


def _clean_name(raza: str) -> str:
    if not raza or not raza.strip():
        raise ValidationError("El nombre de la raza es obligatorio")
    return raza.strip()


@router.get("/Listado/{species_id}", response_model=List[BreedRead])
def list_breeds(species_id: int, db: Session = Depends(get_db)):
    return list_rows(db, models.Breeds, models.Breeds.id_especie == species_id, order_by=models.Breeds.id)


@router.get("/{breed_id}", response_model=BreedRead)
def get_breed(breed_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, models.Breeds, breed_id, BREED_NOT_FOUND)


@router.post("/Crear/{species_id}", status_code=201)
async def create_breed(
    species_id: int,
    raza: Optional[str] = Form(None),
    descripcion: Optional[str] = Form(None),
    imagen: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_storage),
):
    nombre = _clean_name(raza)
    if not db.get(models.Species, species_id):
        raise ValidationError("Especie no encontrada")
    imagen_url = await ingest_image(storage, IMAGE_FOLDER, imagen)
    row = insert(
        db,
        models.Breeds(raza=nombre, descripcion=descripcion, imagen=imagen_url, id_especie=species_id),
        "Conflicto al crear raza",
    )
    logger.info(f"Created breed {row.id} for species {species_id}")
    return {"mensaje": "Raza creada", "id": row.id, "data": BreedRead.model_validate(row)}


@router.put("/Actualizar/{breed_id}")
async def update_breed(
    breed_id: int,
    raza: Optional[str] = Form(None),
    descripcion: Optional[str] = Form(None),
    imagen: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_storage),
):
    row = get_or_404(db, models.Breeds, breed_id, BREED_NOT_FOUND)
    nombre = _clean_name(raza) if raza is not None else None
    imagen_url = await ingest_image(storage, IMAGE_FOLDER, imagen)
    update_fields(db, row, {"raza": nombre, "descripcion": descripcion, "imagen": imagen_url})
    return {"mensaje": "Raza actualizada", "data": BreedRead.model_validate(row)}


@router.delete("/Eliminar/{breed_id}")
def delete_breed(breed_id: int, db: Session = Depends(get_db)):
    row = get_or_404(db, models.Breeds, breed_id, "No hay raza registrada con ese ID")
    data = BreedRead.model_validate(row)
    delete(db, row, "La raza tiene mascotas registradas y no puede eliminarse")
    return {"mensaje": "Raza eliminada", "data": data}
