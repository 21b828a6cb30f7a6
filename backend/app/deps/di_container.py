"""
Dependency injection container using dependency-injector.
Wires services and controllers that do not depend on a request session.
"""

from dependency_injector import containers, providers

from app.core.config import settings
from app.services.health_service import HealthService
from app.services.calendar_validator import CalendarValidator
from app.controllers.health_controller import HealthController


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Configuration
    config = providers.Configuration()

    # Services
    health_service = providers.Singleton(
        HealthService,
    )

    calendar_validator = providers.Singleton(
        CalendarValidator,
        min_work_days=config.calendar_min_work_days,
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


# Global container instance
_container: Container = None


def build_container() -> Container:
    """Create a container configured from application settings."""
    container = Container()
    container.config.from_dict({
        "calendar_min_work_days": settings.CALENDAR_MIN_WORK_DAYS,
    })
    return container


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = build_container()
    return _container
