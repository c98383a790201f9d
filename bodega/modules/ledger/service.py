# bodega/modules/ledger/service.py
from sqlalchemy.orm import Session
from typing import Any, Optional
from decimal import Decimal, InvalidOperation
import logging

from .repository import LedgerRepository
from .schemas import (
    MovementResponse, MovementCreatedResponse, MovementsListResponse, BalanceResponse
)
from bodega.core.exceptions import ValidationError, NotFoundError
from bodega.shared.database.models import MovementType
from bodega.shared.database.transaction import atomic

logger = logging.getLogger(__name__)

VALID_TYPES = {t.value for t in MovementType}


class LedgerService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = LedgerRepository(db)

    def record_movement(
        self,
        description: Optional[str],
        amount: Any,
        movement_type: Optional[str]
    ) -> MovementCreatedResponse:
        """Registrar ingreso/egreso y ajustar el saldo en la misma transacción"""
        description, amount, movement_type = self._validate(description, amount, movement_type)

        with atomic(self.db, "registrar transacción"):
            movement = self.repository.create_movement(description, amount, movement_type)
            if not self.repository.apply_to_balance(amount, movement_type):
                raise NotFoundError("Información de saldo no encontrada")
            response = MovementResponse.model_validate(movement)

        logger.info(f"✅ Movimiento {response.id} registrado: {movement_type} {amount}")

        return MovementCreatedResponse(
            success=True,
            message="Transacción registrada correctamente",
            movement=response
        )

    def get_balance(self) -> BalanceResponse:
        balance = self.repository.get_balance()
        if not balance:
            raise NotFoundError("Información de saldo no encontrada")
        return BalanceResponse(
            saldo=float(balance.balance),
            ingresos=float(balance.income),
            egresos=float(balance.expenses)
        )

    def list_movements(self) -> MovementsListResponse:
        movements = self.repository.list_movements()
        return MovementsListResponse(
            movements=[MovementResponse.model_validate(m) for m in movements]
        )

    def _validate(self, description: Optional[str], amount: Any, movement_type: Optional[str]):
        error = 'Debe proporcionar una descripción, monto y tipo válido ("ingreso" o "egreso")'

        if not description or not description.strip():
            raise ValidationError(error)
        if not movement_type or movement_type.strip().lower() not in VALID_TYPES:
            raise ValidationError(error)
        if amount is None or isinstance(amount, bool):
            raise ValidationError(error)
        try:
            amount = Decimal(str(amount))
        except InvalidOperation:
            raise ValidationError(error)
        if not amount.is_finite() or amount <= 0:
            raise ValidationError("El monto debe ser mayor que cero")

        return description.strip(), amount, movement_type.strip().lower()
