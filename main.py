import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

import models
from config import AUTH_REQUIRED, CORS_ORIGINS, DOCS_URL, LOG_LEVEL, UPLOAD_DIR
from database import SessionLocal, engine
from routes import (
    appointments,
    auth,
    breeds,
    catalog,
    dashboards,
    diseases,
    pets,
    reminders,
    roles,
    species,
    users,
    veterinarians,
)
from security import get_current_user
from seed import seed_lookups

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

PROTECTED_ROUTERS = [
    users.router,
    roles.router,
    veterinarians.router,
    dashboards.router,
    pets.router,
    appointments.router,
    reminders.router,
    species.router,
    breeds.router,
    diseases.router,
    catalog.router,
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    # Sin base de datos no hay servicio: cualquier error aquí detiene el proceso
    models.Base.metadata.create_all(bind=engine, checkfirst=True)
    db = SessionLocal()
    try:
        seed_lookups(db)
    finally:
        db.close()
    yield
    logger.info("Application shutting down...")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"mensaje": exc.detail}, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"mensaje": "Faltan campos o son inválidos", "errores": jsonable_encoder(exc.errors())},
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"mensaje": "Error interno del servidor"})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"mensaje": "Error interno del servidor"})


def create_app(auth_required: bool = AUTH_REQUIRED) -> FastAPI:
    app = FastAPI(
        title="API del proyecto ANIMALBEATS",
        description="Esta API permite llevar el control completo del proyecto AnimalBeats",
        version="1.0.0",
        docs_url=DOCS_URL,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(auth.router)
    protected = [Depends(get_current_user)] if auth_required else []
    for router in PROTECTED_ROUTERS:
        app.include_router(router, dependencies=protected)

    @app.get("/health", tags=["Sistema"])
    def health():
        return {"status": "ok"}

    app.mount("/uploads", StaticFiles(directory=UPLOAD_DIR, check_dir=False), name="uploads")
    return app


app = create_app()
