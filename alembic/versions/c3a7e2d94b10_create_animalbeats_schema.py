"""Crear el esquema de AnimalBeats y poblar las tablas de catálogo

Revision ID: c3a7e2d94b10
Revises: 
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c3a7e2d94b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

estado_usuario = sa.Enum('Activo', 'Suspendido', 'Pendiente', name='estado_usuario')
estado_mascota = sa.Enum('Activo', 'Suspendido', name='estado_mascota')
estado_cita = sa.Enum('Pendiente', 'Confirmado', 'Cancelado', name='estado_cita')
estado_recordatorio = sa.Enum('Activo', 'Inactivo', name='estado_recordatorio')


def upgrade() -> None:
    """Create every table, then seed roles, document types and services."""
    documento = op.create_table(
        'documento',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tipo', sa.String(100), nullable=False, unique=True),
    )
    rol = op.create_table(
        'rol',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('rol', sa.String(50), nullable=False, unique=True),
    )
    op.create_table(
        'usuarios',
        sa.Column('n_documento', sa.String(30), primary_key=True),
        sa.Column('correoelectronico', sa.String(255), nullable=False),
        sa.Column('contrasena', sa.String(255), nullable=False),
        sa.Column('id_documento', sa.Integer(), sa.ForeignKey('documento.id'), nullable=False),
        sa.Column('nombre', sa.String(150), nullable=False),
        sa.Column('id_rol', sa.Integer(), sa.ForeignKey('rol.id'), nullable=False),
        sa.Column('estado', estado_usuario, nullable=False, server_default='Activo'),
        sa.Column('creado_en', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_usuarios_correoelectronico', 'usuarios', ['correoelectronico'], unique=True)
    op.create_index('ix_usuarios_id_rol', 'usuarios', ['id_rol'])

    op.create_table(
        'especie',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('especie', sa.String(100), nullable=False),
        sa.Column('imagen', sa.Text(), nullable=True),
    )
    op.create_table(
        'raza',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('raza', sa.String(100), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('imagen', sa.Text(), nullable=True),
        sa.Column('id_especie', sa.Integer(), sa.ForeignKey('especie.id'), nullable=False),
    )
    op.create_index('ix_raza_id_especie', 'raza', ['id_especie'])

    op.create_table(
        'mascota',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('nombre', sa.String(100), nullable=False),
        sa.Column('id_especie', sa.Integer(), sa.ForeignKey('especie.id'), nullable=False),
        sa.Column('id_raza', sa.Integer(), sa.ForeignKey('raza.id'), nullable=True),
        sa.Column('fecha_nacimiento', sa.Date(), nullable=True),
        sa.Column('estado', estado_mascota, nullable=False, server_default='Activo'),
        sa.Column('id_cliente', sa.String(30), sa.ForeignKey('usuarios.n_documento'), nullable=False),
    )
    op.create_index('ix_mascota_id_cliente', 'mascota', ['id_cliente'])
    op.create_index('ix_mascota_estado', 'mascota', ['estado'])
    op.create_index('ix_mascota_cliente_estado', 'mascota', ['id_cliente', 'estado'])

    servicios = op.create_table(
        'servicios',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('servicio', sa.String(150), nullable=False, unique=True),
    )
    op.create_table(
        'veterinarios',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('nombre_completo', sa.String(200), nullable=False),
        sa.Column('estudios_especialidad', sa.Text(), nullable=False),
        sa.Column('edad', sa.Integer(), nullable=False),
        sa.Column('altura', sa.Numeric(4, 2), nullable=False),
        sa.Column('anios_experiencia', sa.Integer(), nullable=False),
        sa.Column('imagen_url', sa.Text(), nullable=True),
        sa.Column('activo', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('creado_en', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        'citas',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('id_mascota', sa.Integer(), sa.ForeignKey('mascota.id'), nullable=False),
        sa.Column('id_cliente', sa.String(30), sa.ForeignKey('usuarios.n_documento'), nullable=False),
        sa.Column('id_servicio', sa.Integer(), sa.ForeignKey('servicios.id'), nullable=True),
        sa.Column('id_veterinario', sa.Integer(), sa.ForeignKey('veterinarios.id'), nullable=True),
        sa.Column('fecha', sa.DateTime(), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('estado', estado_cita, nullable=False, server_default='Pendiente'),
        sa.Column('creado_en', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_citas_id_mascota', 'citas', ['id_mascota'])
    op.create_index('ix_citas_id_cliente', 'citas', ['id_cliente'])
    op.create_index('ix_citas_estado', 'citas', ['estado'])
    op.create_index('ix_citas_vet_estado', 'citas', ['id_veterinario', 'estado'])

    op.create_table(
        'recordatorios',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('id_cliente', sa.String(30), sa.ForeignKey('usuarios.n_documento'), nullable=False),
        sa.Column('id_mascota', sa.Integer(), sa.ForeignKey('mascota.id'), nullable=False),
        sa.Column('fecha', sa.DateTime(), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('estado', estado_recordatorio, nullable=False, server_default='Activo'),
    )
    op.create_index('ix_recordatorios_id_cliente', 'recordatorios', ['id_cliente'])
    op.create_index('ix_recordatorios_id_mascota', 'recordatorios', ['id_mascota'])

    op.create_table(
        'enfermedad',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('nombre', sa.String(150), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=False),
    )

    # Catalog rows: application code relies on role ids 1, 2 and 3
    op.bulk_insert(rol, [
        {'id': 1, 'rol': 'Administrador'},
        {'id': 2, 'rol': 'Cliente'},
        {'id': 3, 'rol': 'Veterinario'},
    ])
    op.bulk_insert(documento, [
        {'id': 1, 'tipo': 'Cédula de ciudadanía'},
        {'id': 2, 'tipo': 'Tarjeta de identidad'},
        {'id': 3, 'tipo': 'Cédula de extranjería'},
        {'id': 4, 'tipo': 'Pasaporte'},
    ])
    op.bulk_insert(servicios, [
        {'id': 1, 'servicio': 'Consulta general'},
        {'id': 2, 'servicio': 'Vacunación'},
        {'id': 3, 'servicio': 'Desparasitación'},
        {'id': 4, 'servicio': 'Baño y peluquería'},
        {'id': 5, 'servicio': 'Cirugía'},
    ])
    if op.get_bind().dialect.name == 'postgresql':
        for table in ('rol', 'documento', 'servicios'):
            op.execute(f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), (SELECT MAX(id) FROM {table}))")


def downgrade() -> None:
    """Drop every table in reverse dependency order, then the enum types."""
    for table in ('enfermedad', 'recordatorios', 'citas', 'veterinarios', 'servicios',
                  'mascota', 'raza', 'especie', 'usuarios', 'rol', 'documento'):
        op.drop_table(table)
    bind = op.get_bind()
    for enum in (estado_recordatorio, estado_cita, estado_mascota, estado_usuario):
        enum.drop(bind, checkfirst=True)
