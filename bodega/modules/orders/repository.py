# bodega/modules/orders/repository.py
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime
import logging

from bodega.shared.database.models import Order

logger = logging.getLogger(__name__)

NOTES_SEPARATOR = "; "

class OrdersRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_order(self, order_id: int) -> Optional[Order]:
        return self.db.query(Order).filter(Order.id == order_id).first()

    def get_order_for_update(self, order_id: int) -> Optional[Order]:
        """Leer el pedido bloqueando la fila hasta el fin de la transacción"""
        return self.db.query(Order).filter(Order.id == order_id).with_for_update().first()

    def apply_transition(self, order: Order, new_status: str, note: str) -> Order:
        """Cambiar estado, sellar fecha de actualización y agregar nota al historial"""
        order.status = new_status
        order.updated_at = datetime.now()
        order.notes = f"{order.notes}{NOTES_SEPARATOR}{note}" if order.notes else note
        self.db.flush()
        logger.info(f"Pedido {order.id} → {new_status}")
        return order
