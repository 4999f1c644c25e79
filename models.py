from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Numeric, Text, DateTime, Date, Index, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database import Base


# Roles fijos que la aplicación trata de forma especial
ROLE_ADMIN = 1
ROLE_CLIENT = 2
ROLE_VET = 3

USER_STATUSES = ("Activo", "Suspendido", "Pendiente")
PET_STATUSES = ("Activo", "Suspendido")
APPOINTMENT_STATUSES = ("Pendiente", "Confirmado", "Cancelado")
REMINDER_STATUSES = ("Activo", "Inactivo")


class DocumentTypes(Base):
    __tablename__ = "documento"

    id = Column(Integer, primary_key=True, index=True)
    tipo = Column(String(100), unique=True, nullable=False)


class Roles(Base):
    __tablename__ = "rol"

    id = Column(Integer, primary_key=True, index=True)
    rol = Column(String(50), unique=True, nullable=False)


class Users(Base):
    __tablename__ = "usuarios"

    n_documento = Column(String(30), primary_key=True, index=True)
    correoelectronico = Column(String(255), unique=True, index=True, nullable=False)
    contrasena = Column(String(255), nullable=False)
    id_documento = Column(Integer, ForeignKey("documento.id"), nullable=False)
    nombre = Column(String(150), nullable=False)
    id_rol = Column(Integer, ForeignKey("rol.id"), nullable=False, default=ROLE_CLIENT, index=True)
    estado = Column(Enum(*USER_STATUSES, name="estado_usuario"), nullable=False, default="Activo")
    creado_en = Column(DateTime, server_default=func.now(), nullable=False)
    # Relationships
    documento = relationship("DocumentTypes")
    rol = relationship("Roles")
    mascotas = relationship("Pets", back_populates="cliente")


class Species(Base):
    __tablename__ = "especie"

    id = Column(Integer, primary_key=True, index=True)
    especie = Column(String(100), nullable=False)
    imagen = Column(Text, nullable=True)
    # One species -> many breeds
    razas = relationship("Breeds", back_populates="especie", cascade="all, delete-orphan")


class Breeds(Base):
    __tablename__ = "raza"

    id = Column(Integer, primary_key=True, index=True)
    raza = Column(String(100), nullable=False)
    descripcion = Column(Text, nullable=True)
    imagen = Column(Text, nullable=True)
    id_especie = Column(Integer, ForeignKey("especie.id"), nullable=False, index=True)
    especie = relationship("Species", back_populates="razas")


class Pets(Base):
    __tablename__ = "mascota"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(100), nullable=False)
    id_especie = Column(Integer, ForeignKey("especie.id"), nullable=False)
    id_raza = Column(Integer, ForeignKey("raza.id"), nullable=True)
    fecha_nacimiento = Column(Date, nullable=True)
    estado = Column(Enum(*PET_STATUSES, name="estado_mascota"), nullable=False, default="Activo", index=True)
    id_cliente = Column(String(30), ForeignKey("usuarios.n_documento"), nullable=False, index=True)
    # Relationships
    cliente = relationship("Users", back_populates="mascotas")
    especie = relationship("Species")
    raza = relationship("Breeds")
    citas = relationship("Appointments", back_populates="mascota")


class Services(Base):
    __tablename__ = "servicios"

    id = Column(Integer, primary_key=True, index=True)
    servicio = Column(String(150), unique=True, nullable=False)


class Veterinarians(Base):
    __tablename__ = "veterinarios"

    id = Column(Integer, primary_key=True, index=True)
    nombre_completo = Column(String(200), nullable=False)
    estudios_especialidad = Column(Text, nullable=False)
    edad = Column(Integer, nullable=False)
    altura = Column(Numeric(4, 2, asdecimal=False), nullable=False)
    anios_experiencia = Column(Integer, nullable=False)
    imagen_url = Column(Text, nullable=True)
    activo = Column(Boolean, nullable=False, default=True)
    creado_en = Column(DateTime, server_default=func.now(), nullable=False)
    # Appointments assigned
    citas = relationship("Appointments", back_populates="veterinario")


class Appointments(Base):
    __tablename__ = "citas"

    id = Column(Integer, primary_key=True, index=True)
    id_mascota = Column(Integer, ForeignKey("mascota.id"), nullable=False, index=True)
    id_cliente = Column(String(30), ForeignKey("usuarios.n_documento"), nullable=False, index=True)
    id_servicio = Column(Integer, ForeignKey("servicios.id"), nullable=True)
    id_veterinario = Column(Integer, ForeignKey("veterinarios.id"), nullable=True, index=True)
    fecha = Column(DateTime, nullable=False)
    descripcion = Column(Text, nullable=True)
    estado = Column(Enum(*APPOINTMENT_STATUSES, name="estado_cita"), nullable=False, default="Pendiente", index=True)
    creado_en = Column(DateTime, server_default=func.now(), nullable=False)
    # relationships
    mascota = relationship("Pets", back_populates="citas")
    cliente = relationship("Users")
    servicio = relationship("Services")
    veterinario = relationship("Veterinarians", back_populates="citas")


class Reminders(Base):
    __tablename__ = "recordatorios"

    id = Column(Integer, primary_key=True, index=True)
    id_cliente = Column(String(30), ForeignKey("usuarios.n_documento"), nullable=False, index=True)
    id_mascota = Column(Integer, ForeignKey("mascota.id"), nullable=False, index=True)
    fecha = Column(DateTime, nullable=False)
    descripcion = Column(Text, nullable=True)
    estado = Column(Enum(*REMINDER_STATUSES, name="estado_recordatorio"), nullable=False, default="Activo")
    mascota = relationship("Pets")


class Diseases(Base):
    __tablename__ = "enfermedad"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(150), nullable=False)
    descripcion = Column(Text, nullable=False)


# Indexes
Index('ix_citas_vet_estado', Appointments.id_veterinario, Appointments.estado)
Index('ix_mascota_cliente_estado', Pets.id_cliente, Pets.estado)
