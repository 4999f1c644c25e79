import logging

from database import SessionLocal, engine
import models
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

ROLES = {
    models.ROLE_ADMIN: "Administrador",
    models.ROLE_CLIENT: "Cliente",
    models.ROLE_VET: "Veterinario",
}

DOCUMENT_TYPES = {
    1: "Cédula de ciudadanía",
    2: "Tarjeta de identidad",
    3: "Cédula de extranjería",
    4: "Pasaporte",
}

SERVICES = {
    1: "Consulta general",
    2: "Vacunación",
    3: "Desparasitación",
    4: "Baño y peluquería",
    5: "Cirugía",
}


def get_or_create(db, model, pk: int, **data):
    # Lookup rows keep fixed ids so application code can rely on them
    row = db.get(model, pk)
    if row:
        return row
    row = model(id=pk, **data)
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # likely a concurrent insert by another worker; fetch the existing row
        row = db.get(model, pk)
        if row:
            return row
        raise
    db.refresh(row)
    return row


def seed_lookups(db):
    """Ensure roles, document types and services exist."""
    for pk, name in ROLES.items():
        get_or_create(db, models.Roles, pk, rol=name)
    for pk, name in DOCUMENT_TYPES.items():
        get_or_create(db, models.DocumentTypes, pk, tipo=name)
    for pk, name in SERVICES.items():
        get_or_create(db, models.Services, pk, servicio=name)
    if db.bind.dialect.name == "postgresql":
        # explicit ids do not advance the serial sequences
        for table in ("rol", "documento", "servicios"):
            db.execute(text(f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), (SELECT MAX(id) FROM {table}))"))
        db.commit()
    logger.info("Lookup tables seeded")


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    models.Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_lookups(db)
    finally:
        db.close()
