# bodega/shared/database/transaction.py
"""
Coordinador de mutaciones transaccionales.

Toda operación que toca más de una fila o más de una tabla se ejecuta dentro
de `atomic`: un único alcance de transacción sobre la sesión que recibe el
servicio. Commit solo si todos los pasos terminan bien; cualquier excepción
revierte todo.

- Errores de dominio (BodegaError) se revierten y se re-lanzan tal cual.
- Cualquier otro error (normalmente SQLAlchemyError) se revierte y se
  envuelve en TransactionFailed, conservando la causa original.

`savepoint` aísla un ítem dentro de un lote cuyo resultado se reporta por
ítem (reabastecimiento múltiple, sincronización de stock).
"""
from contextlib import contextmanager
from typing import Iterator
import logging

from sqlalchemy.orm import Session, SessionTransaction

from bodega.core.exceptions import BodegaError, TransactionFailed

logger = logging.getLogger(__name__)


@contextmanager
def atomic(db: Session, operation: str) -> Iterator[Session]:
    """Ejecutar un bloque como unidad todo-o-nada"""
    try:
        yield db
        db.commit()
    except BodegaError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"❌ Transacción revertida al {operation}")
        raise TransactionFailed(operation, e) from e


@contextmanager
def savepoint(db: Session) -> Iterator[SessionTransaction]:
    """SAVEPOINT por ítem: si falla, solo se revierte ese ítem"""
    nested = db.begin_nested()
    try:
        yield nested
    except Exception:
        if nested.is_active:
            nested.rollback()
        raise
    else:
        nested.commit()
