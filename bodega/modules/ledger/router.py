# bodega/modules/ledger/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bodega.config.database import get_db
from .service import LedgerService
from .schemas import (
    MovementCreateRequest, MovementCreatedResponse, MovementsListResponse, BalanceResponse
)

router = APIRouter()

@router.post(
    "/transacciones-bodega",
    response_model=MovementCreatedResponse,
    status_code=status.HTTP_201_CREATED
)
def create_movement(
    payload: MovementCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Registrar un movimiento de caja de la bodega

    - **ingreso**: suma al saldo y a los ingresos
    - **egreso**: resta del saldo y suma a los egresos
    """
    service = LedgerService(db)
    return service.record_movement(payload.description, payload.amount, payload.movement_type)

@router.get("/saldo-bodega", response_model=BalanceResponse)
def get_balance(db: Session = Depends(get_db)):
    """Saldo actual con ingresos y egresos acumulados"""
    service = LedgerService(db)
    return service.get_balance()

@router.get("/movimientosGet", response_model=MovementsListResponse)
@router.get("/movimientos-bodega", response_model=MovementsListResponse)
def list_movements(db: Session = Depends(get_db)):
    """Movimientos de caja, del más reciente al más antiguo"""
    service = LedgerService(db)
    return service.list_movements()
