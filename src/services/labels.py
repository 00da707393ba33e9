"""Localized labels for weekday names and duplicated list names."""

from src.config import get_settings

# Indexed by day of week, 0 = Sunday
WEEKDAY_NAMES = {
    "en": ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"),
    "pt": ("Domingo", "Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado"),
}

COPY_SUFFIXES = {
    "en": "(copy)",
    "pt": "(cópia)",
}


def weekday_name(day_of_week: int, locale: str | None = None) -> str:
    """Name of a Sunday-based day of week."""
    return WEEKDAY_NAMES[locale or get_settings().locale][day_of_week]


def copy_name(name: str, locale: str | None = None) -> str:
    """Name given to a duplicate of a list called ``name``."""
    return f"{name} {COPY_SUFFIXES[locale or get_settings().locale]}"
