# bodega/modules/ledger/repository.py
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from bodega.shared.database.models import Movement, Balance, MovementType

class LedgerRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_movement(self, description: str, amount: Decimal, movement_type: str) -> Movement:
        movement = Movement(
            description=description,
            amount=amount,
            movement_type=movement_type,
            created_at=datetime.now()
        )
        self.db.add(movement)
        self.db.flush()
        return movement

    def apply_to_balance(self, amount: Decimal, movement_type: str) -> bool:
        """
        Ajustar la fila única de saldo con un UPDATE atómico.

        ingreso: saldo += monto, ingresos += monto
        egreso:  saldo -= monto, egresos += monto
        """
        if movement_type == MovementType.INCOME.value:
            values = {
                Balance.balance: Balance.balance + amount,
                Balance.income: Balance.income + amount,
            }
        else:
            values = {
                Balance.balance: Balance.balance - amount,
                Balance.expenses: Balance.expenses + amount,
            }

        updated = self.db.query(Balance).filter(
            Balance.id == Balance.SINGLETON_ID
        ).update(values, synchronize_session=False)
        return updated > 0

    def get_balance(self) -> Optional[Balance]:
        return self.db.query(Balance).filter(Balance.id == Balance.SINGLETON_ID).first()

    def list_movements(self) -> List[Movement]:
        return self.db.query(Movement).order_by(
            Movement.created_at.desc(), Movement.id.desc()
        ).all()
