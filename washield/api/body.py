from __future__ import annotations

import json
from typing import Any, Callable, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError


SchemaT = TypeVar("SchemaT", bound=BaseModel)


async def read_body(request: Request) -> dict[str, Any]:
    """Parse a JSON or urlencoded form body. An empty body reads as {}."""
    content_type = request.headers.get("content-type", "").lower()

    if "application/x-www-form-urlencoded" in content_type or "multipart/form-data" in content_type:
        form = await request.form()
        return {k: (v if isinstance(v, str) else str(v)) for k, v in form.items()}

    raw = await request.body()
    if not raw:
        return {}
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise RequestValidationError([{"type": "json_invalid", "loc": ("body",), "msg": "Invalid JSON body"}])
    return payload if isinstance(payload, dict) else {}


def body_of(schema: type[SchemaT]) -> Callable[[Request], Any]:
    async def dependency(request: Request) -> SchemaT:
        payload = await read_body(request)
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            raise RequestValidationError(e.errors())

    return dependency
