"""Error taxonomy shared by every route.

Each error is an ``HTTPException`` so handlers just raise it; ``main.py``
renders all of them as ``{"mensaje": ...}``.
"""

from fastapi import HTTPException


class ValidationError(HTTPException):
    def __init__(self, detail: str = "Datos inválidos"):
        super().__init__(status_code=400, detail=detail)


class Unauthorized(HTTPException):
    def __init__(self, detail: str = "No autorizado"):
        super().__init__(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


class NotFound(HTTPException):
    def __init__(self, detail: str = "Recurso no encontrado"):
        super().__init__(status_code=404, detail=detail)


class Conflict(HTTPException):
    def __init__(self, detail: str = "Conflicto con un registro existente"):
        super().__init__(status_code=409, detail=detail)


class StorageError(HTTPException):
    def __init__(self, detail: str = "Error al subir la imagen"):
        super().__init__(status_code=500, detail=detail)


class InternalError(HTTPException):
    def __init__(self, detail: str = "Error interno del servidor"):
        super().__init__(status_code=500, detail=detail)
