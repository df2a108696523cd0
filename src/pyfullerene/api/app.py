"""
FastAPI application factory.

Usage::

    pyfullerene serve --port 9000
    uvicorn --factory pyfullerene.api.app:create_app
"""
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import pyfullerene
from pyfullerene.api.models import HealthResponse
from pyfullerene.api.routes import router
from pyfullerene.core.service import AnnealingService


def create_app(service: Optional[AnnealingService] = None) -> FastAPI:
    """
    Create the annealing API around one :class:`AnnealingService`.

    Every request to the returned app shares *service*, so ``/api/stop``
    reaches the run or size scan started by another request and
    ``/api/xyz`` returns the cluster of the last run. A fresh service is
    created when none is given.
    """
    application = FastAPI(
        title="pyfullerene API",
        version=pyfullerene.__version__,
        description="Monte Carlo annealing of bond-order clusters.",
    )
    application.state.service = service if service is not None else AnnealingService()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @application.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(
            version=pyfullerene.__version__,
            running=application.state.service.is_running,
        )

    application.include_router(router, prefix="/api")
    return application
