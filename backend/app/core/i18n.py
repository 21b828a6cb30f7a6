"""
Message catalog for user-visible strings.
Lookups are keyed by message identifier; unknown identifiers are returned as-is.
"""

from typing import Dict, Optional

from app.core.config import settings


MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "ID_DEFAULT_CALENDAR": "Default Calendar",
        "ID_CALENDAR_TOO_FEW_WORK_DAYS": "You must define at least {min_days} Working Days!",
        "ID_CALENDAR_NO_BUSINESS_HOURS": "You must define at least one Business Day for all days",
        "ID_CALENDAR_INCOMPLETE_COVERAGE": "Not all working days have their correspondent business day",
        "ID_CALENDAR_NOT_FOUND": "Calendar not found",
        "ID_CALENDAR_ALREADY_EXISTS": "A calendar with this identifier already exists",
    },
    "es": {
        "ID_DEFAULT_CALENDAR": "Calendario por defecto",
        "ID_CALENDAR_TOO_FEW_WORK_DAYS": "¡Debe definir al menos {min_days} días laborables!",
        "ID_CALENDAR_NO_BUSINESS_HOURS": "Debe definir al menos un horario laboral para todos los días",
        "ID_CALENDAR_INCOMPLETE_COVERAGE": "No todos los días laborables tienen su horario laboral correspondiente",
        "ID_CALENDAR_NOT_FOUND": "Calendario no encontrado",
        "ID_CALENDAR_ALREADY_EXISTS": "Ya existe un calendario con este identificador",
    },
}


def translate(message_id: str, locale: Optional[str] = None, **params) -> str:
    """
    Translate a message identifier.

    Falls back to English, then to the identifier itself.
    """
    catalog = MESSAGES.get(locale or settings.LOCALE) or MESSAGES["en"]
    template = catalog.get(message_id) or MESSAGES["en"].get(message_id)
    if template is None:
        return message_id
    return template.format(**params) if params else template
