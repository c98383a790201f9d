# bodega/modules/sales/__init__.py
"""
Módulo de Ventas de Bodega

Registro atómico de ventas: cabecera, detalles y descuento de stock.

Arquitectura:
- router.py: Endpoints de ventas
- service.py: Lógica de negocio de ventas
- repository.py: Acceso a datos de ventas
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "router",
    "SalesService",
    "SalesRepository"
]
