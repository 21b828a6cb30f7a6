"""
Base controller class.
Controllers sit between endpoints and services and return Pydantic schemas.
"""

from abc import ABC


class BaseController(ABC):
    """Base class for calendar and health controllers."""
    pass
