from fastapi import APIRouter

from .health import health_router
from .score import score_router
from .sufficiency import sufficiency_router
from .transactions import transactions_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(transactions_router, tags=["Transactions"])
router.include_router(sufficiency_router, tags=["Data Sufficiency"])
router.include_router(score_router, tags=["Credit Score"])
