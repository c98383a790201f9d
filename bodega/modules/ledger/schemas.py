# bodega/modules/ledger/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
from bodega.shared.schemas.common import BaseResponse

class MovementCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: Optional[str] = Field(None, alias="descripcion", max_length=255, description="Descripción del movimiento")
    amount: Optional[Decimal] = Field(None, alias="monto", description="Monto (positivo)")
    movement_type: Optional[str] = Field(None, alias="tipo", description="ingreso o egreso")

class MovementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str = Field(..., serialization_alias="descripcion")
    amount: float = Field(..., serialization_alias="monto")
    movement_type: str = Field(..., serialization_alias="tipo")
    created_at: datetime = Field(..., serialization_alias="fecha")

class MovementCreatedResponse(BaseResponse):
    movement: MovementResponse

class MovementsListResponse(BaseModel):
    movements: List[MovementResponse] = Field(..., serialization_alias="movimientos")

class BalanceResponse(BaseModel):
    saldo: float
    ingresos: float
    egresos: float
