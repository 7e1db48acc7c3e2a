# app/schemas/common.py
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(description="Human-readable error message")
    status_code: int = Field(description="HTTP status code, repeated in the body")

    model_config = {
        "json_schema_extra": {"examples": [{"error": "user lookup", "status_code": 404}]}
    }


class OkResponse(BaseModel):
    ok: bool = Field(description="Always true")

    model_config = {"json_schema_extra": {"examples": [{"ok": True}]}}


ERROR_RESPONSES: dict[int | str, dict] = {
    code: {"model": ErrorResponse} for code in (400, 401, 404, 409, 410, 500)
}
