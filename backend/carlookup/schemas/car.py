"""
CarLookup Backend: Car Make & Car Model Schemas
================================================

Request bodies are deliberately permissive at the type level (strings may be
empty, ids may be nil); the business rules live in validators.py so every
failure is reported through the same ValidationError envelope.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from carlookup.schemas.base import CamelModel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CarMakeRequest(CamelModel):
    """Body of POST /carmakes and PUT /carmakes/{id}."""

    name: str = Field(default="", description="Make name, 2-100 characters")
    country_of_origin: str = Field(default="", description="Country, 2-100 characters")


class CarModelRequest(CamelModel):
    """Body of POST /carmodels and PUT /carmodels/{id}."""

    make_id: uuid.UUID = Field(default=uuid.UUID(int=0), description="Owning make")
    name: str = Field(default="", description="Model name, 1-120 characters")
    model_year: int = Field(default=0, description="Model year, 1885 to next year")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CarMakeResponse(CamelModel):
    make_id: uuid.UUID
    name: str
    country_of_origin: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class CarModelResponse(CamelModel):
    model_id: uuid.UUID
    make_id: uuid.UUID
    name: str
    model_year: int
    created_at: datetime
    updated_at: Optional[datetime] = None
