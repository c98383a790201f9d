# bodega/modules/orders/service.py
"""
Máquina de estados de pedidos.

    pendiente ──confirmar──▶ confirmado ──completar──▶ completado
        │                        │
        └────────cancelar────────┴──────▶ cancelado

cancelado y completado son terminales.
"""
from typing import Dict, Optional
from sqlalchemy.orm import Session
import logging

from .repository import OrdersRepository
from .schemas import OrderTransitionResponse, OrderResponse
from bodega.core.exceptions import ValidationError, NotFoundError, StateConflictError
from bodega.shared.database.models import OrderStatus
from bodega.shared.database.transaction import atomic

logger = logging.getLogger(__name__)

CANCEL_NOTE_PREFIXES = {
    "bodega": "Cancelado por bodega",
    "farmacia": "Cancelado por farmacia",
}
CONFIRM_NOTE = "Pedido confirmado por bodega"
COMPLETE_NOTE = "Pedido completado por bodega"

# Estados desde los que cada operación está bloqueada, con su mensaje
BLOCKED_TRANSITIONS: Dict[str, Dict[str, str]] = {
    "cancel": {
        OrderStatus.CANCELLED.value: "Este pedido ya fue cancelado anteriormente",
        OrderStatus.COMPLETED.value: "No se puede cancelar un pedido que ya fue completado",
    },
    "confirm": {
        OrderStatus.CANCELLED.value: "No se puede confirmar un pedido que ha sido cancelado",
        OrderStatus.COMPLETED.value: "No se puede confirmar un pedido que ya fue completado",
        OrderStatus.CONFIRMED.value: "Este pedido ya está confirmado",
    },
    "complete": {
        OrderStatus.CANCELLED.value: "No se puede completar un pedido cancelado",
        OrderStatus.COMPLETED.value: "Este pedido ya está completado",
    },
}


class OrdersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = OrdersRepository(db)

    def cancel_order(
        self,
        order_id: Optional[int],
        reason: Optional[str],
        origin: str = "bodega"
    ) -> OrderTransitionResponse:
        """Cancelar un pedido pendiente o confirmado"""
        self._require_order_id(order_id)
        if not reason or not reason.strip():
            raise ValidationError("Se requiere especificar un motivo para cancelar el pedido")
        if origin not in CANCEL_NOTE_PREFIXES:
            raise ValidationError(f"Origen de cancelación inválido: {origin}")

        reason = reason.strip()
        self._transition(
            order_id,
            action="cancel",
            target=OrderStatus.CANCELLED.value,
            note=f"{CANCEL_NOTE_PREFIXES[origin]}: {reason}",
        )
        return OrderTransitionResponse(
            success=True,
            message="Pedido cancelado exitosamente",
            order_id=order_id,
            status=OrderStatus.CANCELLED.value,
            reason=reason,
        )

    def confirm_order(self, order_id: Optional[int]) -> OrderTransitionResponse:
        self._require_order_id(order_id)
        self._transition(
            order_id,
            action="confirm",
            target=OrderStatus.CONFIRMED.value,
            note=CONFIRM_NOTE,
        )
        return OrderTransitionResponse(
            success=True,
            message="Pedido confirmado exitosamente",
            order_id=order_id,
            status=OrderStatus.CONFIRMED.value,
        )

    def complete_order(self, order_id: Optional[int]) -> OrderTransitionResponse:
        self._require_order_id(order_id)
        self._transition(
            order_id,
            action="complete",
            target=OrderStatus.COMPLETED.value,
            note=COMPLETE_NOTE,
        )
        return OrderTransitionResponse(
            success=True,
            message="Pedido marcado como completado exitosamente",
            order_id=order_id,
            status=OrderStatus.COMPLETED.value,
        )

    def get_order(self, order_id: int) -> OrderResponse:
        order = self.repository.get_order(order_id)
        if not order:
            raise NotFoundError("Pedido no encontrado", details={"pedido_id": order_id})
        return OrderResponse.model_validate(order)

    # MÉTODOS PRIVADOS HELPERS

    def _require_order_id(self, order_id: Optional[int]) -> None:
        if not order_id:
            raise ValidationError("Se requiere el ID del pedido")

    def _transition(self, order_id: int, action: str, target: str, note: str) -> None:
        """Búsqueda, guarda y actualización en una sola transacción"""
        with atomic(self.db, f"{self._describe(action)} el pedido"):
            order = self.repository.get_order_for_update(order_id)
            if not order:
                raise NotFoundError("Pedido no encontrado", details={"pedido_id": order_id})

            blocked = BLOCKED_TRANSITIONS[action].get(order.status)
            if blocked:
                logger.warning(f"❌ Pedido {order_id}: {action} bloqueado en estado '{order.status}'")
                raise StateConflictError(blocked, details={"pedido_id": order_id, "estado": order.status})

            self.repository.apply_transition(order, target, note)

    @staticmethod
    def _describe(action: str) -> str:
        return {
            "cancel": "cancelar",
            "confirm": "confirmar",
            "complete": "marcar como completado",
        }[action]
