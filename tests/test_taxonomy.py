from pathlib import Path

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def test_create_species_with_image(client, upload_dir):
    response = client.post(
        "/Especies/Crear",
        data={"Especie": "Perro"},
        files={"imagen": ("perro feliz.png", PNG, "image/png")},
    )
    assert response.status_code == 201, response.text
    url = response.json()["data"]["imagen"]
    assert url.startswith("http://testserver/uploads/especies/")
    assert url.endswith("_perro_feliz.png")

    stored = Path(upload_dir) / "especies" / url.rsplit("/", 1)[1]
    assert stored.read_bytes() == PNG


def test_create_species_without_image(client):
    response = client.post("/Especies/Crear", data={"Especie": "Gato"})
    assert response.status_code == 201
    species_id = response.json()["id"]
    assert client.get(f"/Especies/{species_id}").json() == {"id": species_id, "especie": "Gato", "imagen": None}


def test_species_rejects_non_image_upload(client, upload_dir):
    response = client.post(
        "/Especies/Crear",
        data={"Especie": "Perro"},
        files={"imagen": ("notas.txt", b"hola", "text/plain")},
    )
    assert response.status_code == 400
    assert client.get("/Especies/Listado").json() == []
    assert not Path(upload_dir).exists()


def test_species_requires_name(client):
    assert client.post("/Especies/Crear", data={"Especie": "  "}).status_code == 400


def test_update_and_delete_species(client, factory):
    dog = factory.species("Perro")
    response = client.put(f"/Especies/Actualizar/{dog.id}", data={"Especie": "Canino"})
    assert response.status_code == 200
    assert client.get(f"/Especies/{dog.id}").json()["especie"] == "Canino"

    assert client.delete(f"/Especies/Eliminar/{dog.id}").status_code == 200
    assert client.get(f"/Especies/{dog.id}").status_code == 404
    assert client.delete(f"/Especies/Eliminar/{dog.id}").status_code == 404


def test_breeds_are_listed_per_species(client, factory):
    dog = factory.species("Perro")
    cat = factory.species("Gato")
    factory.breed(cat, "Siamés")

    response = client.post(
        f"/Razas/Crear/{dog.id}",
        data={"raza": "Beagle", "descripcion": "Sabueso"},
        files={"imagen": ("beagle.jpg", b"jpeg", "image/jpeg")},
    )
    assert response.status_code == 201, response.text
    assert "/uploads/razas/" in response.json()["data"]["imagen"]

    listed = client.get(f"/Razas/Listado/{dog.id}").json()
    assert [b["raza"] for b in listed] == ["Beagle"]


def test_breed_needs_existing_species(client, db):
    assert client.post("/Razas/Crear/99", data={"raza": "Beagle"}).status_code == 400


def test_update_and_delete_breed(client, factory):
    breed = factory.breed(factory.species("Perro"), "Beagle")
    response = client.put(f"/Razas/Actualizar/{breed.id}", data={"descripcion": "Orejas largas"})
    assert response.status_code == 200
    body = client.get(f"/Razas/{breed.id}").json()
    assert body["raza"] == "Beagle"
    assert body["descripcion"] == "Orejas largas"

    assert client.delete(f"/Razas/Eliminar/{breed.id}").status_code == 200
    assert client.get(f"/Razas/{breed.id}").status_code == 404


def test_services_are_seeded(client):
    services = client.get("/servicios/Listado").json()
    assert len(services) == 5
    assert services[0]["id"] == 1


# -- enfermedades


def test_disease_crud(client):
    response = client.post("/Enfermedades/Registrar", json={"nombre": "Moquillo", "descripcion": "Viral"})
    assert response.status_code == 201
    disease_id = response.json()["id"]

    response = client.put(f"/Enfermedades/Actualizar/{disease_id}", json={"descripcion": "Enfermedad viral"})
    assert response.status_code == 200
    assert client.get(f"/Enfermedades/{disease_id}").json() == {
        "id": disease_id,
        "nombre": "Moquillo",
        "descripcion": "Enfermedad viral",
    }

    assert client.delete(f"/Enfermedades/Eliminar/{disease_id}").status_code == 200
    assert client.get(f"/Enfermedades/{disease_id}").status_code == 404


def test_disease_requires_both_fields(client):
    response = client.post("/Enfermedades/Registrar", json={"nombre": "Moquillo", "descripcion": " "})
    assert response.status_code == 400
    assert client.get("/Enfermedades/Listado").json() == []


def test_disease_update_needs_a_field(client):
    disease_id = client.post("/Enfermedades/Registrar", json={"nombre": "Sarna", "descripcion": "Piel"}).json()["id"]
    assert client.put(f"/Enfermedades/Actualizar/{disease_id}", json={}).status_code == 400
    assert client.put("/Enfermedades/Actualizar/999", json={"nombre": "X"}).status_code == 404


def test_species_update_rejects_blank_name(client, factory):
    dog = factory.species("Perro")
    response = client.put(f"/Especies/Actualizar/{dog.id}", data={"Especie": "   "})
    assert response.status_code == 400
    assert client.get(f"/Especies/{dog.id}").json()["especie"] == "Perro"


def test_breed_update_rejects_blank_name(client, factory):
    breed = factory.breed(factory.species("Perro"), "Beagle")
    response = client.put(f"/Razas/Actualizar/{breed.id}", data={"raza": "  "})
    assert response.status_code == 400
    assert client.get(f"/Razas/{breed.id}").json()["raza"] == "Beagle"


def test_breed_update_strips_name(client, factory):
    breed = factory.breed(factory.species("Perro"), "Beagle")
    assert client.put(f"/Razas/Actualizar/{breed.id}", data={"raza": "  Basset  "}).status_code == 200
    assert client.get(f"/Razas/{breed.id}").json()["raza"] == "Basset"
