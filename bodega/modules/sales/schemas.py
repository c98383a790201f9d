# bodega/modules/sales/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List
from decimal import Decimal
from bodega.shared.schemas.common import BaseResponse

class SaleLineRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_id: int = Field(..., alias="IDMedicamento", gt=0, description="ID del medicamento")
    quantity: int = Field(..., alias="Stock", gt=0, description="Cantidad vendida")
    unit_price: Decimal = Field(..., alias="PrecioUnitario", ge=0, description="Precio unitario")
    subtotal: Decimal = Field(..., alias="PrecioSubtotal", ge=0, description="Subtotal informado por el cliente")

    @property
    def expected_subtotal(self) -> Decimal:
        return Decimal(self.quantity) * self.unit_price

class SaleCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lines: List[SaleLineRequest] = Field(default_factory=list, alias="detalles", description="Medicamentos vendidos")

class SaleResponse(BaseResponse):
    sale_id: int = Field(..., serialization_alias="IDVenta")
    lines_count: int
