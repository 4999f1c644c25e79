from pydantic import BaseModel, Field, ConfigDict, BeforeValidator
from typing import Optional, Literal, Annotated
from datetime import date, datetime


def _as_text(value):
    # Los documentos llegan a veces como número desde los formularios
    if isinstance(value, int):
        return str(value)
    return value


DocumentNumber = Annotated[str, BeforeValidator(_as_text)]

UserStatus = Literal['Activo', 'Suspendido', 'Pendiente']
PetStatus = Literal['Activo', 'Suspendido']
AppointmentStatus = Literal['Pendiente', 'Confirmado', 'Cancelado']
ReminderStatus = Literal['Activo', 'Inactivo']


# ---------------- Identidad ----------------


class RegisterRequest(BaseModel):
    # Campos opcionales: la validación de obligatorios la hace security.register
    n_documento: Optional[DocumentNumber] = None
    correoelectronico: Optional[str] = None
    contrasena: Optional[str] = None
    id_documento: Optional[int] = None
    nombre: Optional[str] = None


class RegisterResponse(BaseModel):
    mensaje: str
    rol: str


class LoginRequest(BaseModel):
    correoelectronico: str
    contrasena: str


class SessionUser(BaseModel):
    n_documento: str
    nombre: str
    correoelectronico: str
    rol: int


class LoginResponse(BaseModel):
    mensaje: str
    usuario: SessionUser
    rol: str
    token: str


class DocumentTypeRead(BaseModel):
    id: int
    tipo: str

    model_config = ConfigDict(from_attributes=True)


# ---------------- Usuarios / Roles ----------------


class UserCreate(BaseModel):
    n_documento: DocumentNumber = Field(..., max_length=30)
    nombre: str = Field(..., min_length=1, max_length=150)
    correoelectronico: str = Field(..., max_length=255)
    contrasena: str = Field(..., min_length=8)
    id_documento: int
    id_rol: int = 2


class UserUpdate(BaseModel):
    nombre: Optional[str] = Field(None, max_length=150)
    correoelectronico: Optional[str] = Field(None, max_length=255)
    id_documento: Optional[int] = None
    id_rol: Optional[int] = None


class UserRead(BaseModel):
    n_documento: str
    nombre: str
    correoelectronico: str
    id_documento: int
    id_rol: int
    estado: UserStatus

    model_config = ConfigDict(from_attributes=True)


class RoleCreate(BaseModel):
    rol: str = Field(..., max_length=50)


class RoleRead(BaseModel):
    id: int
    rol: str

    model_config = ConfigDict(from_attributes=True)


# ---------------- Veterinarios ----------------


class VeterinarianRead(BaseModel):
    id: int
    nombre_completo: str
    estudios_especialidad: str
    edad: int
    altura: float
    anios_experiencia: int
    imagen_url: Optional[str] = None
    activo: bool
    creado_en: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ---------------- Especies / Razas / Servicios ----------------


class SpeciesRead(BaseModel):
    id: int
    especie: str
    imagen: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class BreedRead(BaseModel):
    id: int
    raza: str
    descripcion: Optional[str] = None
    imagen: Optional[str] = None
    id_especie: int

    model_config = ConfigDict(from_attributes=True)


class ServiceRead(BaseModel):
    id: int
    servicio: str

    model_config = ConfigDict(from_attributes=True)


# ---------------- Mascotas ----------------


class PetBase(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=100)
    id_especie: int
    id_raza: Optional[int] = None
    fecha_nacimiento: Optional[date] = None
    id_cliente: DocumentNumber


class PetCreate(PetBase):
    estado: PetStatus = 'Activo'


class PetUpdate(BaseModel):
    nombre: Optional[str] = Field(None, min_length=1, max_length=100)
    estado: Optional[PetStatus] = None
    fecha_nacimiento: Optional[date] = None
    id_raza: Optional[int] = None


class PetRead(PetBase):
    id: int
    estado: PetStatus

    model_config = ConfigDict(from_attributes=True)


class PetSummary(BaseModel):
    id: int
    nombre: str

    model_config = ConfigDict(from_attributes=True)


# Etiquetas de las tablas relacionadas para los listados
class SpeciesLabel(BaseModel):
    especie: str

    model_config = ConfigDict(from_attributes=True)


class BreedLabel(BaseModel):
    raza: str

    model_config = ConfigDict(from_attributes=True)


class OwnerLabel(BaseModel):
    n_documento: str
    nombre: str

    model_config = ConfigDict(from_attributes=True)


class VeterinarianLabel(BaseModel):
    id: int
    nombre_completo: str

    model_config = ConfigDict(from_attributes=True)


class PetWithLabels(PetRead):
    especie: Optional[SpeciesLabel] = None
    raza: Optional[BreedLabel] = None
    cliente: Optional[OwnerLabel] = None


# ---------------- Citas / Recordatorios ----------------


class AppointmentCreate(BaseModel):
    id_mascota: int
    id_cliente: DocumentNumber
    id_servicio: Optional[int] = None
    id_veterinario: Optional[int] = None
    fecha: datetime
    descripcion: Optional[str] = None


class AppointmentUpdate(BaseModel):
    fecha: Optional[datetime] = None
    descripcion: Optional[str] = None
    estado: Optional[AppointmentStatus] = None


class AppointmentRead(BaseModel):
    id: int
    id_mascota: int
    id_cliente: str
    id_servicio: Optional[int] = None
    id_veterinario: Optional[int] = None
    fecha: datetime
    descripcion: Optional[str] = None
    estado: AppointmentStatus

    model_config = ConfigDict(from_attributes=True)


class AppointmentWithLabels(AppointmentRead):
    mascota: Optional[PetSummary] = None
    cliente: Optional[OwnerLabel] = None
    servicio: Optional[ServiceRead] = None
    veterinario: Optional[VeterinarianLabel] = None


class ReminderCreate(BaseModel):
    cliente: DocumentNumber
    mascota: int
    fecha: datetime
    descripcion: Optional[str] = None


class ReminderRead(BaseModel):
    id: int
    id_cliente: str
    id_mascota: int
    fecha: datetime
    descripcion: Optional[str] = None
    estado: ReminderStatus

    model_config = ConfigDict(from_attributes=True)


class ReminderWithPet(ReminderRead):
    mascota: Optional[PetSummary] = None


# ---------------- Enfermedades ----------------


class DiseaseCreate(BaseModel):
    nombre: str = Field(..., max_length=150)
    descripcion: str


class DiseaseUpdate(BaseModel):
    nombre: Optional[str] = Field(None, max_length=150)
    descripcion: Optional[str] = None


class DiseaseRead(BaseModel):
    id: int
    nombre: str
    descripcion: str

    model_config = ConfigDict(from_attributes=True)

