# bodega/modules/sales/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bodega.config.database import get_db
from .service import SalesService
from .schemas import SaleCreateRequest, SaleResponse

router = APIRouter()

@router.post("/ventas-bodega", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
def create_sale(
    payload: SaleCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Registrar venta de bodega

    **Incluye:**
    - Cabecera de venta con fecha automática
    - Un detalle por medicamento vendido
    - Descuento de stock por cada detalle
    - Todo o nada: si falla una línea no se guarda la venta
    """
    service = SalesService(db)
    return service.record_sale(payload.lines)
