# bodega/modules/sales/repository.py
from sqlalchemy.orm import Session
from datetime import datetime
import logging

from bodega.shared.database.models import Sale, SaleLine, Item

logger = logging.getLogger(__name__)

class SalesRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_sale(self) -> Sale:
        """Crear cabecera de venta y obtener su ID"""
        sale = Sale(sale_date=datetime.now())
        self.db.add(sale)
        self.db.flush()
        return sale

    def add_line(self, sale_id: int, item_id: int, quantity: int, unit_price, subtotal) -> SaleLine:
        line = SaleLine(
            sale_id=sale_id,
            item_id=item_id,
            quantity=quantity,
            unit_price=unit_price,
            subtotal=subtotal
        )
        self.db.add(line)
        self.db.flush()
        return line

    def decrement_stock(self, item_id: int, quantity: int) -> bool:
        """
        Descontar stock con un UPDATE atómico (stock = stock - :qty).

        No hay piso: el stock puede quedar negativo.
        Retorna False si el medicamento no existe.
        """
        updated = self.db.query(Item).filter(Item.id == item_id).update(
            {Item.stock: Item.stock - quantity},
            synchronize_session=False
        )
        return updated > 0
