"""
API routes: thin adapters that delegate to :class:`AnnealingService`.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from pyfullerene.api.models import (
    AnnealRequest,
    AnnealResponse,
    EnergyRequest,
    EnergyResponse,
    ScanRequest,
    ScanResponse,
    XYZResponse,
)
from pyfullerene.core.schemas import AnnealingConfig
from pyfullerene.core.service import AnnealingService

router = APIRouter()


def get_service(request: Request) -> AnnealingService:
    """The service shared by every request to this app."""
    return request.app.state.service


# ------------------------------------------------------------------ #
#  Endpoints
# ------------------------------------------------------------------ #


@router.post("/anneal", response_model=AnnealResponse)
def anneal(req: AnnealRequest, service: AnnealingService = Depends(get_service)):
    try:
        cfg = AnnealingConfig(
            n_atoms=req.n_atoms,
            beta_min=req.beta_min,
            beta_max=req.beta_max,
            exponent=req.exponent,
            n_iterations=req.n_iterations,
            sample_interval=req.sample_interval,
            initial_radius=req.initial_radius,
            seed=req.seed,
            positions=req.positions,
            moves=req.moves,
            potential=req.potential,
        )
        # Run synchronously (HTTP request blocks until done).
        result = service.run(cfg)
        return {"ok": True, "result": result.to_dict()}
    except (RuntimeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/energy", response_model=EnergyResponse)
def energy(req: EnergyRequest, service: AnnealingService = Depends(get_service)):
    try:
        report = service.evaluate(req.positions, req.potential)
        return {"ok": True, "report": report.to_dict()}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/scan", response_model=ScanResponse)
def scan(req: ScanRequest, service: AnnealingService = Depends(get_service)):
    try:
        cfg = AnnealingConfig(
            beta_min=req.beta_min,
            beta_max=req.beta_max,
            exponent=req.exponent,
            n_iterations=req.n_iterations,
            sample_interval=req.n_iterations,
            initial_radius=req.initial_radius,
            seed=req.seed,
        )
        result = service.scan_sizes(range(req.n_min, req.n_max + 1), cfg)
        return {"ok": True, "result": result.to_dict()}
    except (RuntimeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/stop")
def stop(service: AnnealingService = Depends(get_service)):
    service.stop()
    return {"ok": True}


@router.get("/xyz", response_model=XYZResponse)
def get_xyz(service: AnnealingService = Depends(get_service)):
    try:
        return {"ok": True, "xyz": service.get_xyz()}
    except RuntimeError as e:
        raise HTTPException(status_code=400, detail=str(e))
