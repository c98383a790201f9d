# bodega/modules/ledger/__init__.py
"""
Módulo de Caja de Bodega - Movimientos y saldo

Cada movimiento (ingreso/egreso) se registra junto con el ajuste del
saldo único de la bodega, en una sola transacción.

Arquitectura:
- router.py: Endpoints de caja
- service.py: Validación y lógica de movimientos
- repository.py: Acceso a movimientos y saldo
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import LedgerService
from .repository import LedgerRepository

__all__ = [
    "router",
    "LedgerService",
    "LedgerRepository"
]
