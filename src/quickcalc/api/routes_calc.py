"""FastAPI router exposing the calculator, query dispatch and unit catalog."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, Field

from quickcalc.calc.engine import calculate
from quickcalc.errors import UnitCalcError
from quickcalc.launcher.dispatcher import QueryDispatcher, build_dispatcher
from quickcalc.units.registry import default_registry


router = APIRouter(prefix="/v1/calc", tags=["calc"])


class EvaluateReq(BaseModel):
    expression: str = Field(..., description="Expression such as '5 km/h as m/s'")
    long_names: Optional[bool] = None


class EvaluateResp(BaseModel):
    ok: bool = True
    expression: str
    display: str
    value: str
    unit: Optional[str] = None
    exponent: int = 1
    si_value: float
    dimensions: str


@router.post("/evaluate", response_model=EvaluateResp)
def evaluate_expression(req: EvaluateReq) -> EvaluateResp:
    try:
        result = calculate(req.expression, long_names=req.long_names)
    except UnitCalcError as exc:
        raise HTTPException(status_code=422, detail={"message": str(exc), "kind": exc.kind})
    return EvaluateResp(
        expression=result.expression,
        display=result.display,
        value=result.value,
        unit=result.unit,
        exponent=result.exponent,
        si_value=result.si_value,
        dimensions=result.dimensions,
    )


class QueryReq(BaseModel):
    query: str
    limit: Optional[int] = Field(default=None, ge=1)


class EntryModel(BaseModel):
    text: str
    priority: float
    source: str
    payload: Optional[str] = None


class QueryResp(BaseModel):
    entries: List[EntryModel]


def _dispatcher(request: Request) -> QueryDispatcher:
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        dispatcher = build_dispatcher()
        request.app.state.dispatcher = dispatcher
    return dispatcher


@router.post("/query", response_model=QueryResp)
def query(req: QueryReq, request: Request) -> QueryResp:
    entries = _dispatcher(request).dispatch(req.query, limit=req.limit)
    return QueryResp(
        entries=[
            EntryModel(text=e.text, priority=e.priority, source=e.source, payload=e.payload)
            for e in entries
        ]
    )


class UnitModel(BaseModel):
    name: str
    plural: str
    abbreviation: str
    aliases: List[str]
    factor: float
    dimensions: str
    priority: float


@router.get("/units", response_model=List[UnitModel])
def list_units(q: Optional[str] = Query(default=None, description="Substring filter")) -> List[UnitModel]:
    registry = default_registry()
    units = registry.search(q) if q else list(registry.units)
    return [
        UnitModel(
            name=u.name,
            plural=u.plural,
            abbreviation=u.abbreviation,
            aliases=list(u.aliases),
            factor=u.si.value,
            dimensions=u.si.dims.render(),
            priority=u.priority,
        )
        for u in units
    ]


__all__ = ["router"]
