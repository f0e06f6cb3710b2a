# restaurant/api/responses.py
from typing import Any

from fastapi import Response
from fastapi.responses import JSONResponse


def envelope(data: Any = None, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "errorMessage": None, "data": data},
    )


def error_envelope(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "errorMessage": message, "data": None},
    )


def no_content() -> Response:
    return Response(status_code=204)
