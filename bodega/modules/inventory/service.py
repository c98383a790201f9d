# bodega/modules/inventory/service.py
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from pydantic import ValidationError as PydanticValidationError
import logging
import re

from .repository import InventoryRepository
from .schemas import (
    ItemResponse, ItemSummaryResponse, ReplenishEntry, ReplenishResponse, ReplenishBatchResponse,
    SyncProductEntry, SyncStockResponse
)
from bodega.config.settings import settings
from bodega.core.exceptions import ValidationError, NotFoundError
from bodega.shared.database.transaction import atomic, savepoint
from bodega.shared.schemas.common import ItemResult, BatchSummary

logger = logging.getLogger(__name__)

TABLE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


class InventoryService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = InventoryRepository(db)

    # ==================== CONSULTAS ====================

    def list_inventory(self) -> List[ItemResponse]:
        return [ItemResponse.model_validate(item) for item in self.repository.list_items()]

    def list_summary(self) -> List[ItemSummaryResponse]:
        return [ItemSummaryResponse.model_validate(item) for item in self.repository.list_items()]

    def get_low_stock(self, threshold: Optional[int] = None) -> List[ItemResponse]:
        """Reporte de solo lectura: stock < umbral, ascendente"""
        if threshold is None:
            threshold = settings.low_stock_threshold
        items = self.repository.get_low_stock_items(threshold)
        return [ItemResponse.model_validate(item) for item in items]

    # ==================== REABASTECIMIENTO ====================

    def replenish(self, item_id: int, quantity: Any) -> ReplenishResponse:
        """Reabastecer un medicamento; estricto con la cantidad"""
        if not self._is_positive_int(quantity):
            raise ValidationError("Debe proporcionar una cantidad válida para reabastecer")

        with atomic(self.db, "reabastecer el medicamento"):
            if not self.repository.increment_stock(item_id, quantity):
                raise NotFoundError(
                    f"Medicamento {item_id} no encontrado",
                    details={"id": item_id}
                )

        logger.info(f"✅ Medicamento {item_id} reabastecido (+{quantity})")
        return ReplenishResponse(
            success=True,
            message="Medicamento reabastecido correctamente",
            item_id=item_id,
            quantity=quantity
        )

    def replenish_batch(self, entries: Any) -> ReplenishBatchResponse:
        """
        Reabastecimiento múltiple, tolerante: las entradas sin id o con
        cantidad no positiva se omiten y el lote sigue.
        """
        if not isinstance(entries, list) or not entries:
            raise ValidationError("Debe proporcionar una lista válida de productos para reabastecer")

        results: List[ItemResult] = []

        with atomic(self.db, "reabastecer los medicamentos"):
            for raw in entries:
                entry = self._parse_replenish_entry(raw)
                if entry is None:
                    logger.warning(f"ID inválido o cantidad incorrecta para el producto: {raw}")
                    results.append(ItemResult(
                        item_id=self._raw_id(raw),
                        status="skipped",
                        message="ID inválido o cantidad incorrecta"
                    ))
                    continue

                if self.repository.increment_stock(entry.item_id, entry.quantity):
                    results.append(ItemResult(item_id=entry.item_id, status="success"))
                else:
                    results.append(ItemResult(
                        item_id=entry.item_id,
                        status="error",
                        message="Medicamento no encontrado"
                    ))

        summary = BatchSummary.from_results(results)
        logger.info(f"✅ Reabastecimiento múltiple: {summary.succeeded}/{summary.total}")

        return ReplenishBatchResponse(
            success=True,
            message="Medicamentos reabastecidos correctamente",
            results=results,
            summary=summary
        )

    # ==================== SINCRONIZACIÓN CON FARMACIAS ====================

    def sync_pharmacy_stock(self, table_name: Optional[str], products: Any) -> SyncStockResponse:
        """
        Sumar stock en la tabla de inventario de una farmacia.

        Resultado por producto: los errores individuales (duplicado, no
        encontrado, fallo de actualización) no abortan el lote y la
        transacción se confirma con los productos que sí se actualizaron.
        """
        if not table_name or not isinstance(products, list):
            raise ValidationError("Se requiere el nombre de la tabla de farmacia y una lista de productos")
        self._validate_table_name(table_name)

        results: List[ItemResult] = []

        with atomic(self.db, "procesar la actualización de stock"):
            table = self.repository.resolve_pharmacy_table(table_name)
            if table is None:
                raise NotFoundError(
                    "Tabla de farmacia no encontrada",
                    details={"tabla_farmacia": table_name}
                )

            seen = set()
            for raw in products:
                name = raw.get("nombreProducto", raw.get("product_name")) if isinstance(raw, dict) else None

                # Solo nombres str cuentan como duplicados; el resto falla al validar
                if isinstance(name, str):
                    if name in seen:
                        results.append(ItemResult(
                            name=name,
                            status="error",
                            message="Producto duplicado en la solicitud"
                        ))
                        continue
                    seen.add(name)

                results.append(self._sync_product(table, raw, name))

        summary = BatchSummary.from_results(results)
        logger.info(
            f"Actualización de stock en {table_name}: "
            f"{summary.succeeded} exitosos, {summary.failed} errores"
        )

        return SyncStockResponse(
            success=True,
            message="Proceso de actualización de stock completado",
            table_name=table_name,
            results=results,
            summary=summary
        )

    # MÉTODOS PRIVADOS HELPERS

    def _sync_product(self, table, raw: Any, name: Optional[str]) -> ItemResult:
        try:
            entry = SyncProductEntry.model_validate(raw)
        except PydanticValidationError:
            return ItemResult(
                name=None if name is None else str(name),
                status="error",
                message="Nombre o cantidad de producto inválidos"
            )

        found = self.repository.find_pharmacy_product(table, entry.product_name)
        if not found:
            return ItemResult(
                name=entry.product_name,
                status="error",
                message="Producto no encontrado en el inventario"
            )

        try:
            with savepoint(self.db):
                self.repository.increment_pharmacy_stock(table, found.generic_name, entry.quantity)
        except SQLAlchemyError as e:
            logger.error(f"❌ Error al actualizar stock de '{entry.product_name}': {e}")
            return ItemResult(
                name=entry.product_name,
                status="error",
                message="Error al actualizar el stock",
                error_detail=str(e)
            )

        return ItemResult(
            name=entry.product_name,
            status="success",
            previous_stock=found.stock,
            updated_stock=found.stock + entry.quantity
        )

    def _validate_table_name(self, table_name: str) -> None:
        if not TABLE_NAME_PATTERN.match(table_name):
            raise ValidationError("Nombre de tabla inválido")
        if settings.pharmacy_tables and table_name not in settings.pharmacy_tables:
            raise ValidationError("Tabla de farmacia no permitida")

    @staticmethod
    def _is_positive_int(value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool) and value > 0

    @staticmethod
    def _parse_replenish_entry(raw: Any) -> Optional[ReplenishEntry]:
        try:
            return ReplenishEntry.model_validate(raw)
        except PydanticValidationError:
            return None

    @staticmethod
    def _raw_id(raw: Any) -> Optional[int]:
        value = raw.get("id", raw.get("item_id")) if isinstance(raw, dict) else None
        return value if isinstance(value, int) and not isinstance(value, bool) else None
