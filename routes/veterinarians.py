import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

import models
from database import get_db
from errors import ValidationError
from repository import get_or_404, insert, list_rows, update_fields
from schemas import VeterinarianRead
from storage import MediaStorage, get_storage, ingest_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/veterinarios", tags=["Veterinarios"])

VET_NOT_FOUND = "Veterinario no encontrado"
IMAGE_FOLDER = "veterinarios"


def _parse_numbers(edad, altura, anios_experiencia) -> dict:
    # Los formularios multipart envían todo como texto
    parsed = {}
    try:
        if edad is not None:
            parsed["edad"] = int(edad)
        if altura is not None:
            parsed["altura"] = float(altura)
        if anios_experiencia is not None:
            parsed["anios_experiencia"] = int(anios_experiencia)
    except ValueError:
        raise ValidationError("Edad, altura o años de experiencia tienen formato inválido")
    return parsed


@router.post("/crear", status_code=201)
async def create_veterinarian(
    nombre_completo: Optional[str] = Form(None),
    estudios_especialidad: Optional[str] = Form(None),
    edad: Optional[str] = Form(None),
    altura: Optional[str] = Form(None),
    anios_experiencia: Optional[str] = Form(None),
    imagen: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_storage),
):
    if not all([nombre_completo, estudios_especialidad, edad, altura, anios_experiencia]):
        raise ValidationError("Faltan campos obligatorios")
    numbers = _parse_numbers(edad, altura, anios_experiencia)

    imagen_url = await ingest_image(storage, IMAGE_FOLDER, imagen)
    vet = insert(
        db,
        models.Veterinarians(
            nombre_completo=nombre_completo,
            estudios_especialidad=estudios_especialidad,
            imagen_url=imagen_url,
            activo=True,
            **numbers,
        ),
        "Conflicto al crear veterinario",
    )
    logger.info(f"Created veterinarian {vet.id}")
    return {"mensaje": "Veterinario creado correctamente", "id": vet.id, "imagen_url": imagen_url}


@router.get("", response_model=List[VeterinarianRead])
def list_veterinarians(db: Session = Depends(get_db)):
    return list_rows(
        db,
        models.Veterinarians,
        models.Veterinarians.activo.is_(True),
        order_by=models.Veterinarians.creado_en.desc(),
    )


@router.get("/{vet_id}", response_model=VeterinarianRead)
def get_veterinarian(vet_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, models.Veterinarians, vet_id, VET_NOT_FOUND)


@router.put("/{vet_id}", response_model=VeterinarianRead)
async def update_veterinarian(
    vet_id: int,
    nombre_completo: Optional[str] = Form(None),
    estudios_especialidad: Optional[str] = Form(None),
    edad: Optional[str] = Form(None),
    altura: Optional[str] = Form(None),
    anios_experiencia: Optional[str] = Form(None),
    imagen: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_storage),
):
    vet = get_or_404(db, models.Veterinarians, vet_id, VET_NOT_FOUND)
    values = {"nombre_completo": nombre_completo, "estudios_especialidad": estudios_especialidad}
    values.update(_parse_numbers(edad, altura, anios_experiencia))
    values["imagen_url"] = await ingest_image(storage, IMAGE_FOLDER, imagen)
    return update_fields(db, vet, values)


@router.delete("/{vet_id}")
def delete_veterinarian(vet_id: int, db: Session = Depends(get_db)):
    vet = get_or_404(db, models.Veterinarians, vet_id, VET_NOT_FOUND)
    update_fields(db, vet, {"activo": False})
    logger.info(f"Veterinarian {vet_id} deactivated")
    return {"mensaje": "Veterinario marcado como eliminado"}
