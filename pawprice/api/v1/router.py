"""API v1 router module."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from pawprice.api.v1.health import router as health_router
from pawprice.api.v1.price import router as price_router

router = APIRouter(default_response_class=JSONResponse)
router.include_router(price_router)
router.include_router(health_router)
