from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models
from database import get_db
from repository import list_rows
from schemas import ServiceRead

router = APIRouter(tags=["Servicios"])


@router.get("/servicios/Listado", response_model=List[ServiceRead])
def list_services(db: Session = Depends(get_db)):
    return list_rows(db, models.Services, order_by=models.Services.id)
