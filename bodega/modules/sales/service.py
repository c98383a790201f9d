# bodega/modules/sales/service.py
from sqlalchemy.orm import Session
from typing import List
from decimal import Decimal
import logging

from .repository import SalesRepository
from .schemas import SaleLineRequest, SaleResponse
from bodega.config.settings import settings
from bodega.core.exceptions import ValidationError, NotFoundError
from bodega.shared.database.transaction import atomic

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

class SalesService:
    def __init__(self, db: Session, strict_subtotals: bool = None):
        self.db = db
        self.repository = SalesRepository(db)
        self.strict_subtotals = (
            settings.strict_sale_subtotals if strict_subtotals is None else strict_subtotals
        )

    def record_sale(self, lines: List[SaleLineRequest]) -> SaleResponse:
        """
        Registrar venta de bodega.

        Cabecera, detalles y descuentos de stock en una sola transacción:
        si falla cualquier línea no queda nada persistido.
        """
        if not lines:
            raise ValidationError("Debe incluir al menos un medicamento en la venta")

        self._check_subtotals(lines)

        logger.info(f"Registrando venta de bodega con {len(lines)} líneas")

        with atomic(self.db, "registrar la venta"):
            sale = self.repository.create_sale()

            for line in lines:
                # Descontar primero: un medicamento inexistente es 404, no un error de FK
                if not self.repository.decrement_stock(line.item_id, line.quantity):
                    raise NotFoundError(
                        f"Medicamento {line.item_id} no encontrado",
                        details={"IDMedicamento": line.item_id}
                    )
                self.repository.add_line(
                    sale_id=sale.id,
                    item_id=line.item_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    subtotal=line.subtotal
                )

            sale_id = sale.id

        logger.info(f"✅ Venta {sale_id} registrada")

        return SaleResponse(
            success=True,
            message="Venta registrada correctamente",
            sale_id=sale_id,
            lines_count=len(lines)
        )

    def _check_subtotals(self, lines: List[SaleLineRequest]) -> None:
        """El subtotal del cliente se guarda tal cual; las diferencias se reportan"""
        mismatches = [
            {
                "IDMedicamento": line.item_id,
                "subtotal": str(line.subtotal),
                "esperado": str(line.expected_subtotal.quantize(CENT))
            }
            for line in lines
            if line.expected_subtotal.quantize(CENT) != line.subtotal.quantize(CENT)
        ]
        if not mismatches:
            return

        if self.strict_subtotals:
            raise ValidationError(
                "El subtotal no coincide con cantidad por precio unitario",
                details={"lineas": mismatches}
            )
        logger.warning(f"⚠️ Subtotales informados no coinciden: {mismatches}")
