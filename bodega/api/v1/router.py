# bodega/api/v1/router.py
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from bodega.modules.orders.router import router as orders_router
from bodega.modules.sales.router import router as sales_router
from bodega.modules.inventory.router import router as inventory_router
from bodega.modules.ledger.router import router as ledger_router

# Crear router principal de la API v1
api_router = APIRouter()

# Las rutas de cada módulo conservan los paths del frontend existente
# (/movimientosGet, /medicamentos-bodega, /keepalive incluidos)

api_router.include_router(
    orders_router,
    tags=["Pedidos"]
)

api_router.include_router(
    sales_router,
    tags=["Ventas"]
)

api_router.include_router(
    inventory_router,
    tags=["Inventario"]
)

api_router.include_router(
    ledger_router,
    tags=["Caja"]
)

# Ping de los monitores existentes
@api_router.get("/keepalive", response_class=PlainTextResponse, tags=["Health"])
def keepalive():
    return "Server is alive!"
