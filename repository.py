"""Uniform table access used by all route handlers"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import Conflict, NotFound

logger = logging.getLogger(__name__)


def get_or_404(db: Session, model, pk: Any, detail: str = "Recurso no encontrado"):
    row = db.get(model, pk)
    if row is None:
        raise NotFound(detail)
    return row


def list_rows(db: Session, model, *criteria, order_by=None) -> list:
    q = db.query(model)
    if criteria:
        q = q.filter(*criteria)
    if order_by is not None:
        q = q.order_by(order_by)
    return q.all()


def first_row(db: Session, model, *criteria) -> Optional[Any]:
    return db.query(model).filter(*criteria).first()


def _commit(db: Session, conflict_detail: str):
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error: {e.orig}")
        raise Conflict(conflict_detail) from e


def insert(db: Session, row, conflict_detail: str = "Conflicto al crear el registro"):
    db.add(row)
    _commit(db, conflict_detail)
    db.refresh(row)
    logger.info(f"Inserted {row.__tablename__} row")
    return row


def update_fields(
    db: Session,
    row,
    values: dict,
    conflict_detail: str = "Conflicto al actualizar el registro",
    clearable: tuple = (),
):
    """Apply a partial update.

    ``None`` leaves the column untouched, except for the columns named in
    ``clearable``, where an explicit ``None`` empties it.
    """
    for key, value in values.items():
        if not hasattr(row, key):
            continue
        if value is not None or key in clearable:
            setattr(row, key, value)
    _commit(db, conflict_detail)
    db.refresh(row)
    return row


def delete(db: Session, row, conflict_detail: str = "El registro está en uso y no puede eliminarse"):
    db.delete(row)
    _commit(db, conflict_detail)
    logger.info(f"Deleted {row.__tablename__} row")
