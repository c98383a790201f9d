# bodega/modules/orders/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from bodega.shared.schemas.common import BaseResponse

class OrderIdRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: Optional[int] = Field(None, alias="pedido_id", description="ID del pedido")

class CancelOrderRequest(OrderIdRequest):
    reason: Optional[str] = Field(None, alias="motivo", max_length=1000, description="Motivo de la cancelación")

class OrderTransitionResponse(BaseResponse):
    order_id: int = Field(..., serialization_alias="pedido_id")
    status: str = Field(..., serialization_alias="estado")
    reason: Optional[str] = Field(None, serialization_alias="motivo")

class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    pharmacy_name: Optional[str] = None
    status: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
