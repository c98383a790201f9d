# bodega/modules/inventory/__init__.py
"""
Módulo de Inventario de Bodega

- Consulta de inventario y reporte de stock bajo
- Reabastecimiento individual (estricto) y múltiple (tolerante)
- Sincronización de stock con los inventarios de farmacias

Arquitectura:
- router.py: Endpoints de inventario
- service.py: Lógica de negocio de inventario
- repository.py: Acceso a datos de inventario
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import InventoryService
from .repository import InventoryRepository

__all__ = [
    "router",
    "InventoryService",
    "InventoryRepository"
]
