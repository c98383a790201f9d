from decimal import Decimal

import pytest

from bodega.core.exceptions import NotFoundError, ValidationError
from bodega.modules.ledger.service import LedgerService
from bodega.shared.database.models import Balance, Movement


def test_income_then_expense_updates_balance(db_session):
    service = LedgerService(db_session)

    service.record_movement("Venta mostrador", 100, "ingreso")
    service.record_movement("Pago proveedor", 40, "egreso")

    balance = service.get_balance()
    assert (balance.saldo, balance.ingresos, balance.egresos) == (60.0, 100.0, 40.0)
    assert db_session.query(Movement).count() == 2


def test_movements_are_commutative(db_session):
    service = LedgerService(db_session)

    service.record_movement("Pago proveedor", 40, "egreso")
    service.record_movement("Venta mostrador", 100, "ingreso")

    balance = db_session.get(Balance, Balance.SINGLETON_ID)
    assert balance.balance == Decimal("60")
    assert balance.income == Decimal("100")
    assert balance.expenses == Decimal("40")


def test_movement_type_is_case_insensitive(db_session):
    result = LedgerService(db_session).record_movement("  Aporte  ", "25.50", "INGRESO")

    assert result.movement.movement_type == "ingreso"
    assert result.movement.description == "Aporte"
    assert result.movement.amount == 25.5


@pytest.mark.parametrize("description, amount, movement_type", [
    ("", 10, "ingreso"),
    ("Pago", 10, "transferencia"),
    ("Pago", None, "egreso"),
    ("Pago", 0, "egreso"),
    ("Pago", -5, "ingreso"),
    ("Pago", "diez", "ingreso"),
])
def test_invalid_movement_touches_nothing(db_session, description, amount, movement_type):
    with pytest.raises(ValidationError):
        LedgerService(db_session).record_movement(description, amount, movement_type)

    assert db_session.query(Movement).count() == 0
    assert db_session.get(Balance, Balance.SINGLETON_ID).balance == 0


def test_missing_balance_row_rolls_back_movement(db_session):
    db_session.query(Balance).delete()
    db_session.commit()

    with pytest.raises(NotFoundError):
        LedgerService(db_session).record_movement("Venta", 10, "ingreso")

    assert db_session.query(Movement).count() == 0


def test_list_movements_newest_first(db_session):
    service = LedgerService(db_session)
    service.record_movement("Primero", 1, "ingreso")
    service.record_movement("Segundo", 2, "ingreso")

    listed = service.list_movements()

    assert [m.description for m in listed.movements] == ["Segundo", "Primero"]
