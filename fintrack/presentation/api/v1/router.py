from fastapi import APIRouter

from .health import health_router
from .transactions import transactions_router
from .dashboard import dashboard_router
from .charts import charts_router
from .exports import exports_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(transactions_router, tags=["Transactions"])
router.include_router(dashboard_router, tags=["Dashboard"])
router.include_router(charts_router, tags=["Charts"])
router.include_router(exports_router, tags=["Exports"])
