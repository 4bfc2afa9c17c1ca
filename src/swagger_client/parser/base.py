"""Data models for a loaded Swagger document.

The Swagger loader converts the raw document into these models; the registry,
the request materializers and the transport only ever read them.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ParamLocation(str, Enum):
    """Where a parameter's value is sent."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    FORM_DATA = "formData"
    BODY = "body"


class Param(BaseModel):
    """A single declared parameter of an operation."""

    model_config = ConfigDict(frozen=True)

    name: str
    location: ParamLocation | None = None  # None: ignored when materializing
    required: bool = False
    param_type: str = "string"
    description: str = ""


class Operation(BaseModel):
    """A single API operation."""

    model_config = ConfigDict(frozen=True)

    path: str  # /items/{id}
    method: str  # GET / POST / PUT / DELETE / PATCH / HEAD / OPTIONS
    operation_id: str | None = None
    summary: str = ""
    parameters: list[Param] | None = None
    consumes: list[str] | None = None
    produces: list[str] | None = None

    @property
    def name(self) -> str:
        """Identifier used in error messages: operationId, else the path."""
        return self.operation_id or self.path


class SpecDocument(BaseModel):
    """Document-level settings shared by every operation."""

    model_config = ConfigDict(frozen=True)

    base_url: str  # api.example.com/v1
    schemes: list[str] = []


class RequestOptions(BaseModel):
    """Materialized request: everything a transport needs besides the URL."""

    method: str
    headers: dict[str, Any] = {}
    body: Any = None
