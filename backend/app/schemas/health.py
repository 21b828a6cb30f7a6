"""
Health check response schemas.
"""

from pydantic import BaseModel, Field
from typing import Dict


class HealthResponse(BaseModel):
    """Health check response: overall status, ISO 8601 uptime and per-check results."""
    status: str
    uptime: str
    checks: Dict[str, str] = Field(default_factory=dict)
