# bodega/modules/orders/__init__.py
"""
Módulo de Pedidos - Ciclo de vida de pedidos de farmacia

Estados: pendiente → confirmado → completado, o cancelado desde
pendiente/confirmado. Cada transición agrega una nota al historial.

Arquitectura:
- router.py: Endpoints de pedidos
- service.py: Máquina de estados y guardas
- repository.py: Acceso a datos de pedidos
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import OrdersService
from .repository import OrdersRepository

__all__ = [
    "router",
    "OrdersService",
    "OrdersRepository"
]
