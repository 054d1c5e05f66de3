from __future__ import annotations

from typing import Any, Mapping, Optional

from fastapi.responses import JSONResponse

from .render import render_json


class PrettyJSONResponse(JSONResponse):
    """Two-space indented UTF-8 JSON, open to any origin."""

    media_type = "application/json;charset=UTF-8"

    def __init__(
        self,
        content: Any,
        status_code: int = 200,
        headers: Optional[Mapping[str, str]] = None,
        allow_origin: str = "*",
        **kwargs: Any,
    ) -> None:
        headers = dict(headers or {})
        headers.setdefault("Access-Control-Allow-Origin", allow_origin)
        super().__init__(content, status_code=status_code, headers=headers, **kwargs)

    def render(self, content: Any) -> bytes:
        return render_json(content).encode("utf-8")
