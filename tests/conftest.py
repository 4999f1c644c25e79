import os

# Must be set before the project modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["AUTH_REQUIRED"] = "false"

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

import models
from database import Base, SessionLocal, engine
from main import create_app
from security import hash_password
from seed import seed_lookups
from storage import LocalDiskStorage, get_storage

PASSWORD = "secreto123"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    seed_lookups(session)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


def _build_client(db, upload_dir, auth_required):
    app = create_app(auth_required=auth_required)
    app.dependency_overrides[get_storage] = lambda: LocalDiskStorage(str(upload_dir), "http://testserver")
    return TestClient(app)


@pytest.fixture
def client(db, upload_dir):
    return _build_client(db, upload_dir, auth_required=False)


@pytest.fixture
def secured_client(db, upload_dir):
    return _build_client(db, upload_dir, auth_required=True)


class Factory:
    """Inserts rows directly so tests can focus on one endpoint."""

    def __init__(self, db):
        self.db = db

    def _save(self, row):
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def user(self, n_documento="100", email=None, id_rol=models.ROLE_CLIENT, estado="Activo", nombre="Ana"):
        return self._save(models.Users(
            n_documento=n_documento,
            correoelectronico=email or f"user{n_documento}@correo.com",
            contrasena=hash_password(PASSWORD),
            id_documento=1,
            nombre=nombre,
            id_rol=id_rol,
            estado=estado,
        ))

    def species(self, especie="Perro"):
        return self._save(models.Species(especie=especie))

    def breed(self, species, raza="Labrador"):
        return self._save(models.Breeds(raza=raza, id_especie=species.id))

    def pet(self, owner, species=None, nombre="Firulais", estado="Activo"):
        species = species or self.species()
        return self._save(models.Pets(
            nombre=nombre,
            id_especie=species.id,
            fecha_nacimiento=date(2020, 5, 1),
            estado=estado,
            id_cliente=owner.n_documento,
        ))

    def vet(self, nombre="Dra. Rivera", activo=True):
        return self._save(models.Veterinarians(
            nombre_completo=nombre,
            estudios_especialidad="Medicina interna",
            edad=40,
            altura=1.70,
            anios_experiencia=12,
            activo=activo,
        ))

    def appointment(self, pet, estado="Pendiente", fecha=None, vet=None):
        return self._save(models.Appointments(
            id_mascota=pet.id,
            id_cliente=pet.id_cliente,
            id_veterinario=vet.id if vet else None,
            id_servicio=1,
            fecha=fecha or datetime.utcnow() + timedelta(days=3),
            descripcion="Control anual",
            estado=estado,
        ))


@pytest.fixture
def factory(db):
    return Factory(db)
