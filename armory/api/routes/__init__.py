"""API route modules."""

from armory.api.routes.assignments import router as assignments_router
from armory.api.routes.audit import router as audit_router
from armory.api.routes.expenditures import router as expenditures_router
from armory.api.routes.health import router as health_router
from armory.api.routes.inventory import router as inventory_router
from armory.api.routes.purchases import router as purchases_router
from armory.api.routes.transfers import router as transfers_router

__all__ = [
    "health_router",
    "purchases_router",
    "transfers_router",
    "assignments_router",
    "expenditures_router",
    "inventory_router",
    "audit_router",
]
