"""Standard JSON envelope: {success, message?, data?}."""

from __future__ import annotations

from typing import Any, Mapping

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class APIResponse(JSONResponse):
    def __init__(
        self,
        success: bool,
        data: Any | None = None,
        message: str | None = None,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        **extra: Any,
    ):
        content: dict[str, Any] = {"success": success}
        if message is not None:
            content["message"] = message
        if data is not None:
            content["data"] = jsonable_encoder(data)
        content.update(jsonable_encoder(extra))
        super().__init__(content=content, status_code=status_code, headers=headers)
