# bodega/modules/inventory/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
from datetime import date
from bodega.shared.schemas.common import BaseResponse, ItemResult, BatchSummary

class ItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    generic_name: str
    display_name: Optional[str] = None
    manufacturer: Optional[str] = None
    content: Optional[str] = None
    pharmaceutical_form: Optional[str] = None
    presentation: Optional[str] = None
    manufacture_date: Optional[date] = None
    expiry_date: Optional[date] = None
    units_per_box: Optional[int] = None
    unit_price: float
    stock: int

class ReplenishRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    quantity: Optional[int] = Field(None, alias="cantidad", description="Unidades a reabastecer")

class ReplenishEntry(BaseModel):
    """Entrada del reabastecimiento múltiple; se valida una por una"""
    model_config = ConfigDict(populate_by_name=True)

    item_id: int = Field(..., alias="id", gt=0)
    quantity: int = Field(..., alias="cantidad", gt=0)

class ReplenishResponse(BaseResponse):
    item_id: int
    quantity: int

class ReplenishBatchResponse(BaseResponse):
    results: List[ItemResult]
    summary: BatchSummary

class SyncProductEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_name: str = Field(..., alias="nombreProducto", min_length=1)
    quantity: int = Field(..., alias="cantidadProducto", gt=0)

class SyncStockRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    table_name: Optional[str] = Field(None, alias="tablaFarmacia", description="Tabla de inventario de la farmacia")
    products: Optional[List[Dict[str, Any]]] = Field(None, alias="productos", description="Productos a sumar")

class SyncStockResponse(BaseResponse):
    table_name: str = Field(..., serialization_alias="tabla_farmacia")
    results: List[ItemResult]
    summary: BatchSummary

class ItemSummaryResponse(BaseModel):
    """Resumen para selectores del frontend"""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., serialization_alias="ID")
    generic_name: str = Field(..., serialization_alias="NombreGenerico")
    stock: int = Field(..., serialization_alias="Stock")
    manufacture_date: Optional[date] = Field(None, serialization_alias="FechaFabricacion")
