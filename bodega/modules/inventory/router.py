# bodega/modules/inventory/router.py
from fastapi import APIRouter, Body, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import Any, List, Optional

from bodega.config.database import get_db
from .service import InventoryService
from .schemas import (
    ItemResponse, ItemSummaryResponse, ReplenishRequest, ReplenishResponse, ReplenishBatchResponse,
    SyncStockRequest, SyncStockResponse
)

router = APIRouter()

@router.get("/inventarioBodega", response_model=List[ItemResponse])
def get_warehouse_inventory(db: Session = Depends(get_db)):
    """Inventario completo de la bodega"""
    service = InventoryService(db)
    return service.list_inventory()

@router.get("/medicamentos-bodega", response_model=List[ItemSummaryResponse])
def get_items_summary(db: Session = Depends(get_db)):
    """Listado resumido: ID, nombre genérico, stock y fecha de fabricación"""
    service = InventoryService(db)
    return service.list_summary()

@router.get("/inventarioBodega/bajoStock",response_model=List[ItemResponse])
def get_low_stock(
    threshold: Optional[int] = Query(None, ge=0, description="Umbral de stock (por defecto 50)"),
    db: Session = Depends(get_db)
):
    """
    Medicamentos con stock bajo

    - Solo stock estrictamente menor al umbral
    - Ordenados de menor a mayor stock
    """
    service = InventoryService(db)
    return service.get_low_stock(threshold)

@router.put("/medicamentos-bodega/reabastecer-multiple", response_model=ReplenishBatchResponse)
def replenish_multiple(
    entries: Any = Body(..., description="Lista de {id, cantidad}"),
    db: Session = Depends(get_db)
):
    """
    Reabastecer varios medicamentos

    Las entradas inválidas (sin id o con cantidad no positiva) se omiten;
    el detalle por entrada viene en `results`.
    """
    service = InventoryService(db)
    return service.replenish_batch(entries)

@router.put("/medicamentos-bodega/{item_id}/reabastecer", response_model=ReplenishResponse)
def replenish_item(
    payload: ReplenishRequest,
    item_id: int = Path(..., gt=0, description="ID del medicamento"),
    db: Session = Depends(get_db)
):
    """Reabastecer un medicamento (la cantidad debe ser un entero positivo)"""
    service = InventoryService(db)
    return service.replenish(item_id, payload.quantity)

@router.post("/bodega/actualizar-stock", response_model=SyncStockResponse)
def sync_pharmacy_stock(
    payload: SyncStockRequest,
    db: Session = Depends(get_db)
):
    """
    Sumar stock en el inventario de una farmacia

    **Resultado por producto:**
    - success: stock anterior y actualizado
    - error: duplicado en la solicitud, no encontrado o fallo al actualizar

    Los productos exitosos se confirman aunque otros fallen.
    """
    service = InventoryService(db)
    return service.sync_pharmacy_stock(payload.table_name, payload.products)
