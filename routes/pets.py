import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models
from database import get_db
from errors import NotFound, ValidationError
from repository import get_or_404, insert, list_rows, update_fields
from schemas import PetCreate, PetRead, PetSummary, PetUpdate, PetWithLabels

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Mascotas"])

PET_NOT_FOUND = "No hay mascota registrada con ese ID"


def _check_breed(db: Session, id_raza, id_especie):
    if id_raza is None:
        return
    breed = db.get(models.Breeds, id_raza)
    if not breed:
        raise ValidationError("Raza no encontrada")
    if breed.id_especie != id_especie:
        raise ValidationError("La raza no pertenece a la especie")


@router.get("/mascotas", response_model=List[PetWithLabels])
def list_pets(db: Session = Depends(get_db)):
    return list_rows(db, models.Pets, models.Pets.estado != "Suspendido", order_by=models.Pets.id)


@router.get("/Mascotas/{pet_id}", response_model=PetWithLabels)
def get_pet(pet_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, models.Pets, pet_id, PET_NOT_FOUND)


@router.post("/Mascotas/Registro", status_code=201)
def create_pet(payload: PetCreate, db: Session = Depends(get_db)):
    # validate owner and taxonomy exist
    if not db.get(models.Users, payload.id_cliente):
        raise ValidationError("Cliente no encontrado")
    if not db.get(models.Species, payload.id_especie):
        raise ValidationError("Especie no encontrada")
    _check_breed(db, payload.id_raza, payload.id_especie)

    pet = insert(db, models.Pets(**payload.model_dump()), "Conflicto al registrar mascota")
    logger.info(f"Registered pet {pet.id} for client {pet.id_cliente}")
    return {"mensaje": "Mascota ingresada correctamente", "id": pet.id, "data": PetRead.model_validate(pet)}


@router.put("/Mascotas/Actualizar/{pet_id}")
def update_pet(pet_id: int, payload: PetUpdate, db: Session = Depends(get_db)):
    pet = get_or_404(db, models.Pets, pet_id, PET_NOT_FOUND)
    _check_breed(db, payload.id_raza, pet.id_especie)
    update_fields(db, pet, payload.model_dump(exclude_unset=True), clearable=("id_raza", "fecha_nacimiento"))
    return {"mensaje": "Mascota actualizada correctamente", "data": PetRead.model_validate(pet)}


@router.put("/Mascotas/Eliminar/{pet_id}")
def delete_pet(pet_id: int, db: Session = Depends(get_db)):
    pet = get_or_404(db, models.Pets, pet_id, PET_NOT_FOUND)
    update_fields(db, pet, {"estado": "Suspendido"})
    logger.info(f"Pet {pet_id} suspended")
    return {"mensaje": "Mascota eliminada correctamente", "data": PetRead.model_validate(pet)}


@router.get("/Mascota/recordatorio/{n_documento}", response_model=List[PetSummary])
def list_client_pets(n_documento: str, db: Session = Depends(get_db)):
    """Active pets of a client, used to fill reminder forms."""
    pets = list_rows(
        db,
        models.Pets,
        models.Pets.id_cliente == n_documento,
        models.Pets.estado != "Suspendido",
        order_by=models.Pets.id,
    )
    if not pets:
        raise NotFound("No hay mascota registrada para ese cliente")
    return pets
