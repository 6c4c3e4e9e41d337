"""
Standardized response utilities
"""

from typing import Any, List, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel


def dump(model: BaseModel) -> dict:
    return model.model_dump(mode="json", by_alias=True)


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = 200,
    **extra: Any
) -> JSONResponse:
    """Create standardized success response"""
    content = {"success": True}
    if message is not None:
        content["message"] = message
    content.update(extra)
    if data is not None:
        content["data"] = data
    return JSONResponse(content=content, status_code=status_code)


def error_response(
    message: str,
    errors: Optional[List[dict]] = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    content = {"success": False, "message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(content=content, status_code=status_code)
