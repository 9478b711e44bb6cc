"""
CRUD routes over the in-memory cache, mounted under ``/api``.

Handlers are coroutines without await points between reading and writing the
cache, so every request runs its cache operation on the event loop in one
step.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status
from fastapi.responses import JSONResponse, Response

from ..services.cache import Cache, CacheError
from .schemas import ErrorResponse, KeyResponse, KeysResponse, UpdateResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Cache"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Key not found"}}

_JSON_OBJECT_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": {"type": "object"}}},
    }
}


def get_cache(request: Request) -> Cache:
    return request.app.state.cache


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


async def json_object_body(request: Request) -> Dict[str, Any]:
    """Parse the request body as a strict JSON object (no NaN or Infinity)."""
    raw = await request.body()
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Request body must be valid JSON: {e}",
        ) from e
    if not isinstance(data, dict):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Request body must be a JSON object",
        )
    return data


def _internal_error(action: str, exc: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {exc}", exc_info=exc)
    return HTTPException(status_code=500, detail="Internal Server Error")


@router.get("", response_model=KeysResponse, summary="List all keys")
async def list_keys(cache: Cache = Depends(get_cache)) -> KeysResponse:
    try:
        return KeysResponse(keys=cache.keys)
    except Exception as e:
        raise _internal_error("list keys", e) from e


@router.get("/{key}", summary="Get the value stored under a key", responses=_NOT_FOUND)
async def get_entry(
    key: str = Path(..., description="Cache key."),
    cache: Cache = Depends(get_cache),
) -> JSONResponse:
    try:
        return JSONResponse(cache.get(key))
    except CacheError:
        raise
    except Exception as e:
        raise _internal_error(f"get key {key}", e) from e


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=KeyResponse,
    summary="Store a value under a generated key",
    openapi_extra=_JSON_OBJECT_BODY,
)
async def create_entry(
    data: Dict[str, Any] = Depends(json_object_body),
    cache: Cache = Depends(get_cache),
) -> KeyResponse:
    try:
        return KeyResponse(key=cache.create(data))
    except CacheError:
        raise
    except Exception as e:
        raise _internal_error("create entry", e) from e


@router.put(
    "/{key}",
    summary="Merge into an existing key or create it",
    openapi_extra=_JSON_OBJECT_BODY,
    responses={
        200: {"model": UpdateResponse, "description": "Existing key updated"},
        201: {"model": KeyResponse, "description": "Key created"},
    },
)
async def upsert_entry(
    key: str = Path(..., description="Cache key."),
    data: Dict[str, Any] = Depends(json_object_body),
    cache: Cache = Depends(get_cache),
) -> JSONResponse:
    try:
        created, result = cache.upsert(key, data)
        if created:
            return JSONResponse({"key": result}, status_code=status.HTTP_201_CREATED)
        return JSONResponse(result, status_code=status.HTTP_200_OK)
    except CacheError:
        raise
    except Exception as e:
        raise _internal_error(f"upsert key {key}", e) from e


@router.delete(
    "/{key}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove a key",
    responses=_NOT_FOUND,
)
async def delete_entry(
    key: str = Path(..., description="Cache key."),
    cache: Cache = Depends(get_cache),
) -> Response:
    try:
        cache.remove(key)
    except CacheError:
        raise
    except Exception as e:
        raise _internal_error(f"remove key {key}", e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove all keys",
)
async def clear_entries(cache: Cache = Depends(get_cache)) -> Response:
    try:
        cache.clear()
    except Exception as e:
        raise _internal_error("clear cache", e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
