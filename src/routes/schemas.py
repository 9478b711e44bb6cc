from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel


class KeysResponse(BaseModel):
    keys: List[str]


class KeyResponse(BaseModel):
    key: str


class UpdateResponse(BaseModel):
    key: str
    data: Dict[str, Any]


class ErrorResponse(BaseModel):
    error: str
