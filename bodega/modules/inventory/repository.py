# bodega/modules/inventory/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import Table, case, func, inspect, or_, select, update
from sqlalchemy.engine import Row
from typing import List, Optional
import logging

from bodega.shared.database.models import Item, pharmacy_inventory_table

logger = logging.getLogger(__name__)

class InventoryRepository:
    def __init__(self, db: Session):
        self.db = db

    # ==================== BODEGA ====================

    def list_items(self) -> List[Item]:
        return self.db.query(Item).order_by(Item.id.asc()).all()

    def get_low_stock_items(self, threshold: int) -> List[Item]:
        """Medicamentos con stock estrictamente menor al umbral, de menor a mayor"""
        return self.db.query(Item).filter(
            Item.stock < threshold
        ).order_by(Item.stock.asc(), Item.id.asc()).all()

    def increment_stock(self, item_id: int, quantity: int) -> bool:
        """UPDATE atómico stock = stock + :qty; False si el medicamento no existe"""
        updated = self.db.query(Item).filter(Item.id == item_id).update(
            {Item.stock: Item.stock + quantity},
            synchronize_session=False
        )
        return updated > 0

    # ==================== FARMACIAS ====================

    def resolve_pharmacy_table(self, table_name: str) -> Optional[Table]:
        """Tabla de inventario de farmacia, o None si no existe en la BD"""
        if not inspect(self.db.connection()).has_table(table_name):
            return None
        return pharmacy_inventory_table(table_name)

    def find_pharmacy_product(self, table: Table, product_name: str) -> Optional[Row]:
        """
        Buscar por nombre exacto o normalizado (minúsculas, sin espacios).
        Si hay ambos, gana la coincidencia exacta.
        """
        normalized = product_name.replace(" ", "").lower()
        exact = table.c.generic_name == product_name
        stmt = (
            select(table.c.generic_name, table.c.stock)
            .where(
                or_(
                    exact,
                    func.replace(func.lower(table.c.generic_name), " ", "") == normalized
                )
            )
            .order_by(case((exact, 0), else_=1), table.c.id.asc())
            .limit(1)
            .with_for_update()
        )
        return self.db.execute(stmt).first()

    def increment_pharmacy_stock(self, table: Table, generic_name: str, quantity: int) -> int:
        stmt = (
            update(table)
            .where(table.c.generic_name == generic_name)
            .values(stock=table.c.stock + quantity)
        )
        return self.db.execute(stmt).rowcount
