"""
Mflix API - Response Envelope
==============================

What:  The single response shape returned by every endpoint.
How:   `Envelope` is a Pydantic model used both for OpenAPI documentation and
       for building responses. Constructors below map each outcome to its
       status code; `to_response()` renders the JSONResponse.

Shape:
    {
        "status": 200,               # always equals the HTTP status code
        "message": "...",            # optional
        "data": {...},               # optional, success only
        "error": "..."               # optional, failure only
    }

Outcome table:
    ok        → 200  data
    created   → 201  message + data
    updated   → 200  message + data
    deleted   → 200  data
    failure   → 4xx/5xx  message + error
"""

from typing import Any, Dict, Optional

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, model_validator

# ObjectId is not JSON serializable; render it as its 24-char hex string
DOCUMENT_ENCODERS = {ObjectId: str}


def encode_document(value: Any) -> Any:
    """JSON-ready copy of a store document (ObjectId → str, datetime → ISO 8601)."""
    return jsonable_encoder(value, custom_encoder=DOCUMENT_ENCODERS)


class Envelope(BaseModel):
    """Uniform response body. `data` and `error` are never both set."""

    status: int = Field(description="Mirrors the HTTP status code")
    message: Optional[str] = Field(default=None, description="Human-readable outcome")
    data: Optional[Dict[str, Any]] = Field(default=None, description="Payload on success")
    error: Optional[str] = Field(default=None, description="Failure detail")

    @model_validator(mode="after")
    def check_data_xor_error(self) -> "Envelope":
        if self.data is not None and self.error is not None:
            raise ValueError("An envelope carries either data or error, not both")
        return self

    # ── Success ───────────────────────────────────────────────────────────

    @classmethod
    def ok(cls, data: Dict[str, Any]) -> "Envelope":
        return cls(status=200, data=data)

    @classmethod
    def created(cls, message: str, data: Dict[str, Any]) -> "Envelope":
        return cls(status=201, message=message, data=data)

    @classmethod
    def updated(cls, message: str, data: Dict[str, Any]) -> "Envelope":
        # Updates always answer 200, for every resource family
        return cls(status=200, message=message, data=data)

    @classmethod
    def deleted(cls, data: Dict[str, Any]) -> "Envelope":
        return cls(status=200, data=data)

    # ── Failure ───────────────────────────────────────────────────────────

    @classmethod
    def failure(cls, status: int, message: str, error: str) -> "Envelope":
        return cls(status=status, message=message, error=error)

    @classmethod
    def method_not_allowed(cls, method: str) -> "Envelope":
        return cls.failure(405, "Method Not Allowed", f"{method.upper()} method is not supported")

    # ── Rendering ─────────────────────────────────────────────────────────

    def body(self) -> Dict[str, Any]:
        """Envelope as a JSON-ready dict, omitting unset optional fields."""
        content: Dict[str, Any] = {"status": self.status}
        if self.message is not None:
            content["message"] = self.message
        if self.data is not None:
            content["data"] = encode_document(self.data)
        if self.error is not None:
            content["error"] = self.error
        return content

    def to_response(self, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
        return JSONResponse(status_code=self.status, content=self.body(), headers=headers)
