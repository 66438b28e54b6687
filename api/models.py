"""
API response models for the vendor login service.

Session and error bodies are JSON-LD documents built by core/codec.py, not
Pydantic models: their shape is set by a JSON-LD frame. Only the plain JSON
endpoints get a model here.
"""

from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    """Response for GET /health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    service: str = "vendor-login"
    version: str
