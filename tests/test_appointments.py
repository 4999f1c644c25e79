from datetime import datetime, timedelta

import pytest

import models
from errors import ValidationError
from workflow import can_transition, transition_appointment


@pytest.fixture
def pet(factory):
    return factory.pet(factory.user(n_documento="10"))


def appointment_payload(pet, **overrides):
    payload = {
        "id_mascota": pet.id,
        "id_cliente": pet.id_cliente,
        "id_servicio": 1,
        "fecha": (datetime.utcnow() + timedelta(days=2)).isoformat(),
        "descripcion": "Vacuna anual",
    }
    payload.update(overrides)
    return payload


def test_new_appointment_starts_pending(client, factory, pet):
    vet = factory.vet()
    response = client.post("/Citas/Registrar", json=appointment_payload(pet, id_veterinario=vet.id, estado="Confirmado"))
    assert response.status_code == 201, response.text
    assert response.json()["resultado"]["estado"] == "Pendiente"


def test_appointment_pet_must_belong_to_client(client, factory, db, pet):
    factory.user(n_documento="20")
    response = client.post("/Citas/Registrar", json=appointment_payload(pet, id_cliente="20"))
    assert response.status_code == 400
    assert db.query(models.Appointments).count() == 0


@pytest.mark.parametrize("overrides", [{"id_servicio": 999}, {"id_veterinario": 999}, {"id_cliente": "999"}])
def test_appointment_references_must_exist(client, db, pet, overrides):
    response = client.post("/Citas/Registrar", json=appointment_payload(pet, **overrides))
    assert response.status_code == 400
    assert db.query(models.Appointments).count() == 0


def test_appointment_rejects_inactive_vet_and_suspended_pet(client, factory, pet):
    retired = factory.vet(activo=False)
    assert client.post("/Citas/Registrar", json=appointment_payload(pet, id_veterinario=retired.id)).status_code == 400

    sleeping = factory.pet(factory.user(n_documento="30"), estado="Suspendido")
    assert client.post("/Citas/Registrar", json=appointment_payload(sleeping)).status_code == 400


def test_confirm_then_cancel(client, factory, pet):
    appt = factory.appointment(pet)
    assert client.put(f"/Citas/Confirmar/{appt.id}").status_code == 200
    response = client.put(f"/Citas/Cancelar/{appt.id}")
    assert response.status_code == 200
    assert client.get(f"/Citas/{appt.id}").json()["estado"] == "Cancelado"


def test_cancelled_appointment_is_terminal(client, factory, pet):
    appt = factory.appointment(pet, estado="Cancelado")
    assert client.put(f"/Citas/Confirmar/{appt.id}").status_code == 400
    assert client.put(f"/Citas/Cancelar/{appt.id}").status_code == 400
    assert client.put(f"/Citas/Pendiente/{appt.id}").status_code == 400
    assert client.get(f"/Citas/{appt.id}").json()["estado"] == "Cancelado"


def test_confirmed_appointment_cannot_return_to_pending(client, factory, pet):
    appt = factory.appointment(pet, estado="Confirmado")
    assert client.put(f"/Citas/Pendiente/{appt.id}").status_code == 400
    assert client.put(f"/Citas/Confirmar/{appt.id}").status_code == 400


def test_update_guards_status_changes(client, factory, pet):
    appt = factory.appointment(pet, estado="Cancelado")
    response = client.put(f"/Citas/Actualizar/{appt.id}", json={"estado": "Confirmado", "descripcion": "otra"})
    assert response.status_code == 400

    appt = factory.appointment(pet)
    response = client.put(f"/Citas/Actualizar/{appt.id}", json={"estado": "Confirmado", "descripcion": "Revisión"})
    assert response.status_code == 200
    body = client.get(f"/Citas/{appt.id}").json()
    assert body["estado"] == "Confirmado"
    assert body["descripcion"] == "Revisión"


def test_status_endpoints_on_missing_appointment(client, db):
    assert client.put("/Citas/Confirmar/404").status_code == 404
    assert client.put("/Citas/Cancelar/404").status_code == 404
    assert client.get("/Citas/404").status_code == 404


def test_pet_appointments_and_delete(client, factory, pet):
    first = factory.appointment(pet)
    factory.appointment(pet)
    assert len(client.get(f"/Citas/mascota/{pet.id}").json()) == 2
    assert len(client.get("/Citas/Listado").json()) == 2

    assert client.delete(f"/Citas/Eliminar/{first.id}").status_code == 200
    assert client.get(f"/Citas/{first.id}").status_code == 404


@pytest.mark.parametrize("current, target, allowed", [
    ("Pendiente", "Confirmado", True),
    ("Pendiente", "Cancelado", True),
    ("Confirmado", "Cancelado", True),
    ("Confirmado", "Pendiente", False),
    ("Cancelado", "Pendiente", False),
    ("Cancelado", "Confirmado", False),
    ("Pendiente", "Pendiente", False),
])
def test_transition_table(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_transition_appointment_raises_on_invalid_move():
    appt = models.Appointments(id=1, estado="Cancelado")
    with pytest.raises(ValidationError):
        transition_appointment(appt, "Confirmado")
    assert appt.estado == "Cancelado"


def test_listing_includes_related_labels(client, factory, pet):
    vet = factory.vet("Dr. Gómez")
    appt = factory.appointment(pet, vet=vet)

    (listed,) = client.get("/Citas/Listado").json()
    assert listed["mascota"] == {"id": pet.id, "nombre": "Firulais"}
    assert listed["cliente"] == {"n_documento": "10", "nombre": "Ana"}
    assert listed["servicio"] == {"id": 1, "servicio": "Consulta general"}
    assert listed["veterinario"] == {"id": vet.id, "nombre_completo": "Dr. Gómez"}

    assert client.get(f"/Citas/{appt.id}").json()["servicio"]["servicio"] == "Consulta general"
    (by_pet,) = client.get(f"/Citas/mascota/{pet.id}").json()
    assert by_pet["servicio"]["servicio"] == "Consulta general"


def test_update_to_current_status_is_rejected(client, factory, pet):
    appt = factory.appointment(pet)
    response = client.put(f"/Citas/Actualizar/{appt.id}", json={"estado": "Pendiente", "descripcion": "otra"})
    assert response.status_code == 400
    assert client.get(f"/Citas/{appt.id}").json()["descripcion"] == "Control anual"


def test_update_can_clear_description(client, factory, pet):
    appt = factory.appointment(pet)
    assert client.put(f"/Citas/Actualizar/{appt.id}", json={"descripcion": None}).status_code == 200
    assert client.get(f"/Citas/{appt.id}").json()["descripcion"] is None
