# bodega/modules/orders/router.py
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from bodega.config.database import get_db
from .service import OrdersService
from .schemas import (
    OrderIdRequest, CancelOrderRequest, OrderTransitionResponse, OrderResponse
)

router = APIRouter()

@router.post("/bodega/cancelar-pedido", response_model=OrderTransitionResponse)
def cancel_order_from_warehouse(
    payload: CancelOrderRequest,
    db: Session = Depends(get_db)
):
    """
    Cancelar un pedido desde la bodega

    **Reglas:**
    - El motivo es obligatorio
    - No se puede cancelar un pedido cancelado o completado
    - La nota "Cancelado por bodega: <motivo>" se agrega al historial
    """
    service = OrdersService(db)
    return service.cancel_order(payload.order_id, payload.reason, origin="bodega")

@router.post("/farmacias/cancelar-pedido", response_model=OrderTransitionResponse)
def cancel_order_from_pharmacy(
    payload: CancelOrderRequest,
    db: Session = Depends(get_db)
):
    """Cancelar un pedido desde la farmacia que lo solicitó"""
    service = OrdersService(db)
    return service.cancel_order(payload.order_id, payload.reason, origin="farmacia")

@router.post("/bodega/confirmar-pedido", response_model=OrderTransitionResponse)
def confirm_order(
    payload: OrderIdRequest,
    db: Session = Depends(get_db)
):
    """Confirmar un pedido pendiente"""
    service = OrdersService(db)
    return service.confirm_order(payload.order_id)

@router.post("/bodega/marcar-pedido-completado", response_model=OrderTransitionResponse)
def complete_order(
    payload: OrderIdRequest,
    db: Session = Depends(get_db)
):
    """Marcar un pedido pendiente o confirmado como completado"""
    service = OrdersService(db)
    return service.complete_order(payload.order_id)

@router.get("/bodega/pedidos/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int = Path(..., gt=0, description="ID del pedido"),
    db: Session = Depends(get_db)
):
    service = OrdersService(db)
    return service.get_order(order_id)
