"""
Response envelope helpers.

Every endpoint answers with {Success, Message, Object, Errors}; paginated
endpoints add {PageNumber, PageSize, TotalSize}.
"""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel


def _encode(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [_encode(item) for item in data]
    return jsonable_encoder(data)


def success_response(message: str, data: Any = None, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "Success": True,
            "Message": message,
            "Object": _encode(data),
            "Errors": None,
        },
    )


def paginated_response(
    message: str,
    data: list,
    page_number: int,
    page_size: int,
    total_size: int
) -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={
            "Success": True,
            "Message": message,
            "Object": _encode(data),
            "PageNumber": page_number,
            "PageSize": page_size,
            "TotalSize": total_size,
            "Errors": None,
        },
    )


def error_response(
    message: str,
    errors: list[str] | None = None,
    status_code: int = 400,
    headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "Success": False,
            "Message": message,
            "Object": None,
            "Errors": errors or [message],
        },
        headers=headers,
    )
