import os

# La app se importa con SQLite: nunca debe tocar la BD real en los tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import MetaData, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bodega.config.database import enable_sqlite_savepoints, get_db
from bodega.main import app
from bodega.shared.database.init_db import ensure_balance_row
from bodega.shared.database.models import Base, Item, Order, pharmacy_inventory_table


@pytest.fixture(scope="function")
def engine():
    """
    Motor SQLite en memoria, uno por test.

    StaticPool comparte la única conexión entre la sesión del test y los
    requests del TestClient; los SAVEPOINT quedan habilitados.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session(session_factory) -> Session:
    """Sesión con el esquema creado y el saldo inicial en cero"""
    session = session_factory()
    ensure_balance_row(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session, session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# ---------- helpers de datos ----------
# Se siembra con una sesión propia que se cierra enseguida: la conexión es
# compartida y no puede quedar una transacción abierta antes de un request.

@pytest.fixture
def seed(engine):
    def _seed(*objects):
        with Session(engine, expire_on_commit=False) as session:
            session.add_all(objects)
            session.commit()
        return objects[0] if len(objects) == 1 else objects
    return _seed


@pytest.fixture
def make_item(seed):
    def _make_item(generic_name: str, stock: int = 0, unit_price: str = "10.00") -> Item:
        return seed(Item(generic_name=generic_name, stock=stock, unit_price=Decimal(unit_price)))
    return _make_item


@pytest.fixture
def make_order(seed):
    def _make_order(status: str = "pendiente", notes: str = None) -> Order:
        return seed(Order(pharmacy_name="Farmacia Centro", status=status, notes=notes))
    return _make_order


@pytest.fixture
def pharmacy_table(engine):
    """Tabla de inventario de una farmacia con tres productos"""
    table = pharmacy_inventory_table("inventario_farmacia_centro", MetaData())
    table.create(bind=engine)
    with engine.begin() as conn:
        conn.execute(table.insert(), [
            {"id": 1, "generic_name": "Paracetamol", "stock": 10},
            {"id": 2, "generic_name": "Acido Folico", "stock": 5},
            {"id": 3, "generic_name": "Ibuprofeno", "stock": 0},
        ])
    return table


@pytest.fixture
def pharmacy_stock(engine, pharmacy_table):
    def _pharmacy_stock(generic_name: str) -> int:
        with engine.connect() as conn:
            return conn.execute(
                pharmacy_table.select().where(pharmacy_table.c.generic_name == generic_name)
            ).one().stock
    return _pharmacy_stock
