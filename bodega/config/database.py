# bodega/config/database.py
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .settings import settings


def enable_sqlite_savepoints(engine: Engine) -> Engine:
    """
    pysqlite abre transacciones por su cuenta y rompe SAVEPOINT;
    se desactiva y SQLAlchemy emite BEGIN explícito.
    """
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


engine_kwargs = {
    "pool_pre_ping": True,
    "echo": settings.debug,
    "connect_args": settings.connect_args,
}

# SQLite no soporta pool_recycle con el pool por defecto de forma útil
if not settings.is_sqlite:
    engine_kwargs["pool_recycle"] = settings.db_pool_recycle

# Create engine
engine = create_engine(settings.database_url, **engine_kwargs)
if settings.is_sqlite:
    enable_sqlite_savepoints(engine)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Database dependency
def get_db() -> Generator[Session, None, None]:
    """
    Sesión por request.

    La sesión es el handle de transacción que se pasa explícitamente a cada
    servicio; siempre se cierra, y cualquier transacción abierta que no se
    haya confirmado se descarta al cerrar.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
