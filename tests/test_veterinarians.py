import pytest

import models
from storage import MediaStorage, get_storage

VET_FORM = {
    "nombre_completo": "Dra. Camila Rivera",
    "estudios_especialidad": "Cirugía",
    "edad": "38",
    "altura": "1.68",
    "anios_experiencia": "10",
}


def test_create_veterinarian_with_photo(client):
    response = client.post(
        "/veterinarios/crear",
        data=VET_FORM,
        files={"imagen": ("foto.webp", b"webp", "image/webp")},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["imagen_url"].startswith("http://testserver/uploads/veterinarios/")

    vet = client.get(f"/veterinarios/{body['id']}").json()
    assert vet["edad"] == 38
    assert vet["altura"] == pytest.approx(1.68)
    assert vet["activo"] is True


@pytest.mark.parametrize("field", ["nombre_completo", "edad", "anios_experiencia"])
def test_missing_field_is_rejected(client, db, field):
    form = {k: v for k, v in VET_FORM.items() if k != field}
    assert client.post("/veterinarios/crear", data=form).status_code == 400
    assert db.query(models.Veterinarians).count() == 0


def test_non_numeric_values_are_rejected(client, db):
    response = client.post("/veterinarios/crear", data={**VET_FORM, "altura": "alto"})
    assert response.status_code == 400
    assert db.query(models.Veterinarians).count() == 0


def test_soft_delete_hides_from_list(client, factory):
    kept = factory.vet("Dr. Gómez")
    gone = factory.vet("Dra. Pérez")

    assert client.delete(f"/veterinarios/{gone.id}").status_code == 200
    assert [v["id"] for v in client.get("/veterinarios").json()] == [kept.id]
    assert client.get(f"/veterinarios/{gone.id}").json()["activo"] is False


def test_partial_update(client, factory):
    vet = factory.vet()
    response = client.put(f"/veterinarios/{vet.id}", data={"edad": "41"})
    assert response.status_code == 200
    body = response.json()
    assert body["edad"] == 41
    assert body["nombre_completo"] == "Dra. Rivera"


def test_unknown_veterinarian(client, db):
    assert client.get("/veterinarios/99").status_code == 404
    assert client.delete("/veterinarios/99").status_code == 404


class BrokenStorage(MediaStorage):
    def save(self, folder, filename, content, content_type):
        raise OSError("disco lleno")


def test_storage_failure_aborts_creation(client, db):
    client.app.dependency_overrides[get_storage] = lambda: BrokenStorage()
    response = client.post(
        "/veterinarios/crear",
        data=VET_FORM,
        files={"imagen": ("foto.png", b"png", "image/png")},
    )
    assert response.status_code == 500
    assert response.json() == {"mensaje": "Error al subir la imagen"}
    assert db.query(models.Veterinarians).count() == 0
