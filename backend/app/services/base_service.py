"""
Base service class.
Services hold calendar business logic and coordinate repositories.
"""

from abc import ABC


class BaseService(ABC):
    """Base class for calendar, resolver and health services."""
    pass
