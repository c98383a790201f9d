# bodega/shared/database/init_db.py
"""
Creación de tablas y fila única de saldo.

Uso: python -m bodega.shared.database.init_db
"""
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from bodega.shared.database.models import Base, Balance

logger = logging.getLogger(__name__)


def ensure_balance_row(db: Session) -> Balance:
    """Crear el saldo inicial en cero si no existe"""
    balance = db.get(Balance, Balance.SINGLETON_ID)
    if balance is None:
        balance = Balance(id=Balance.SINGLETON_ID, balance=0, income=0, expenses=0)
        db.add(balance)
        db.commit()
        logger.info("✅ Saldo de bodega inicializado en cero")
    return balance


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
    with Session(engine) as db:
        ensure_balance_row(db)


if __name__ == "__main__":
    from bodega.config.database import engine

    logging.basicConfig(level=logging.INFO)
    init_db(engine)
    logger.info("🎉 Base de datos lista")
