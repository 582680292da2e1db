"""
ucumkit API Routes
==================

HTTP endpoints for the public operations.

Ineligible expressions answer 422 with the error kind:
    {"detail": {"expression": "Cel2", "error": "SpecialUnitMisuse", "message": "..."}}
"""

import time

from fastapi import FastAPI, Query, Request, Response, HTTPException

from ucumkit import __version__
from ucumkit.errors import MagnitudeOutOfRange, UcumError
from ucumkit.server.handler import canonize_batch
from ucumkit.service import get_service

app = FastAPI(
    title="ucumkit",
    description="UCUM unit expression validation, canonization and conversion",
    version=__version__
)


def _unprocessable(expression: str, error: UcumError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "expression": expression,
            "error": error.kind,
            "message": error.message,
        },
    )


def _require(expression: str, purpose: str) -> None:
    """Raise 422 if an expression is not eligible for a purpose."""
    service = get_service()
    try:
        if purpose == 'validity':
            service.validate(expression, purpose)
        else:
            service.evaluate(expression, purpose)
    except UcumError as e:
        raise _unprocessable(expression, e)


def _finite(result, expression: str):
    """Raise 422 for an arithmetic result that left the float range."""
    if result is None:
        raise _unprocessable(expression, MagnitudeOutOfRange(expression))
    return result


@app.get("/health")
async def health():
    """Health check."""
    return {
        "status": "ok",
        "version": __version__,
        "units": len(get_service().catalog),
    }


@app.get("/valid")
async def valid(expression: str = Query(...)):
    error = get_service().diagnose(expression, 'validity')
    return {
        "expression": expression,
        "valid": error is None,
        "error": error.kind if error else None,
    }


@app.get("/canonize")
async def canonize(expression: str = Query(...)):
    _require(expression, 'canonization')
    canonical = get_service().canonize(expression)
    return {"expression": expression, **canonical.to_dict()}


@app.get("/vector")
async def vector(expression: str = Query(...)):
    _require(expression, 'canonization')
    return {"expression": expression, "vector": get_service().canon_vector(expression)}


@app.get("/convert")
async def convert(source: str = Query(...), target: str = Query(...), quantity: float = Query(1.0)):
    _require(source, 'operations')
    _require(target, 'operations')
    return {
        "source": source,
        "target": target,
        "quantity": quantity,
        "result": _finite(get_service().convert(source, target, quantity), source),
    }


@app.get("/commensurable")
async def commensurable(source: str = Query(...), target: str = Query(...)):
    return {
        "source": source,
        "target": target,
        "commensurable": get_service().is_commensurable(source, target),
    }


@app.get("/multiply")
async def multiply(source: str = Query(...), target: str = Query(...),
                   source_quantity: float = Query(1.0), target_quantity: float = Query(1.0)):
    _require(source, 'operations')
    _require(target, 'operations')
    product = _finite(
        get_service().multiply(source, source_quantity, target, target_quantity),
        f"{source}.{target}",
    )
    return product.to_dict()


@app.get("/divide")
async def divide(source: str = Query(...), target: str = Query(...),
                 source_quantity: float = Query(1.0), target_quantity: float = Query(1.0)):
    _require(source, 'operations')
    _require(target, 'operations')
    if target_quantity == 0:
        raise HTTPException(status_code=422, detail="target_quantity must be non-zero")
    quotient = _finite(
        get_service().divide(source, source_quantity, target, target_quantity),
        f"{source}/{target}",
    )
    return quotient.to_dict()


@app.get("/display")
async def display(expression: str = Query(...)):
    _require(expression, 'validity')
    return {"expression": expression, "display": get_service().display_name(expression)}


@app.get("/notation")
async def notation(quantity: float = Query(...)):
    literal = get_service().number_to_notation(quantity)
    if literal is None:
        raise HTTPException(status_code=422, detail="quantity must be finite and non-negative")
    return {"quantity": quantity, "notation": literal}


@app.post("/canonize/batch")
async def canonize_batch_endpoint(request: Request):
    """
    Batch canonize endpoint.

    Headers:
        Content-Type: application/octet-stream
        X-Format: 'parquet' or 'csv' (optional, auto-detected)

    Body:
        Parquet or CSV bytes with an 'expression' column

    Returns:
        Parquet bytes: expression, valid, units, magnitude, error
    """
    start = time.time()

    body = await request.body()
    if not body:
        raise HTTPException(status_code=400, detail="Empty body")

    try:
        result = canonize_batch(body, request.headers.get("X-Format"))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return Response(
        content=result,
        media_type="application/octet-stream",
        headers={"X-Compute-Duration": str(time.time() - start)},
    )
