# bodega/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, DateTime, Date, Text,
    Numeric, ForeignKey, MetaData, Table, func
)
from sqlalchemy.orm import declarative_base, relationship
import enum

Base = declarative_base()


class OrderStatus(str, enum.Enum):
    PENDING = "pendiente"
    CONFIRMED = "confirmado"
    CANCELLED = "cancelado"
    COMPLETED = "completado"


class MovementType(str, enum.Enum):
    INCOME = "ingreso"
    EXPENSE = "egreso"


# =====================================================
# MIXIN PARA TIMESTAMPS
# =====================================================
class TimestampMixin:
    """Mixin que agrega campos created_at y updated_at"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


# =====================================================
# INVENTARIO DE BODEGA
# =====================================================

class Item(Base):
    """Medicamento del inventario central (bodega)"""
    __tablename__ = "medicamentos_bodega"

    id = Column(Integer, primary_key=True, index=True)
    generic_name = Column(String(255), nullable=False, index=True)
    display_name = Column(String(255))
    manufacturer = Column(String(255))
    content = Column(String(100))
    pharmaceutical_form = Column(String(100))
    presentation = Column(String(100))
    manufacture_date = Column(Date)
    expiry_date = Column(Date)
    units_per_box = Column(Integer)
    unit_price = Column(Numeric(10, 2), nullable=False, default=0)
    # Sin CHECK >= 0: las ventas pueden dejar stock negativo
    stock = Column(Integer, nullable=False, default=0)

    sale_lines = relationship("SaleLine", back_populates="item")


class Sale(Base):
    __tablename__ = "ventas_bodega"

    id = Column(Integer, primary_key=True, index=True)
    sale_date = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    lines = relationship("SaleLine", back_populates="sale", cascade="all, delete-orphan")


class SaleLine(Base):
    __tablename__ = "detalles_venta_bodega"

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer, ForeignKey("ventas_bodega.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("medicamentos_bodega.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)

    sale = relationship("Sale", back_populates="lines")
    item = relationship("Item", back_populates="sale_lines")


# =====================================================
# CAJA DE BODEGA
# =====================================================

class Movement(Base):
    """Movimiento de caja (ingreso o egreso), solo inserción"""
    __tablename__ = "movimientos_bodega"

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    movement_type = Column(String(50), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), index=True)


class Balance(Base):
    """Saldo de bodega: una sola fila (id = 1)"""
    __tablename__ = "saldo_bodega"

    SINGLETON_ID = 1

    id = Column(Integer, primary_key=True)
    balance = Column(Numeric(12, 2), nullable=False, default=0)
    income = Column(Numeric(12, 2), nullable=False, default=0)
    expenses = Column(Numeric(12, 2), nullable=False, default=0)


# =====================================================
# PEDIDOS
# =====================================================

class Order(Base, TimestampMixin):
    """Pedido de una farmacia a la bodega"""
    __tablename__ = "pedidos"

    id = Column(Integer, primary_key=True, index=True)
    pharmacy_name = Column(String(255))
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    notes = Column(Text)


# =====================================================
# INVENTARIOS DE FARMACIA (tablas externas, una por farmacia)
# =====================================================

def pharmacy_inventory_table(table_name: str, metadata: MetaData = None) -> Table:
    """
    Describir la tabla de inventario de una farmacia.

    El nombre debe llegar ya validado; se usa solo como identificador
    de SQLAlchemy, nunca interpolado en SQL.
    """
    return Table(
        table_name,
        metadata if metadata is not None else MetaData(),
        Column("id", Integer, primary_key=True),
        Column("generic_name", String(255), nullable=False),
        Column("stock", Integer, nullable=False, default=0),
    )
