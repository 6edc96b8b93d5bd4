"""
Analyse et validation stricte des dates de naissance.

Ce module transforme une chaîne `YYYY-MM-DD` en `CalendarDate` validée, ou lève une `DateError`
dont le message est renvoyé tel quel aux clients de l'API.

Points d'attention:
- Le format est vérifié par une correspondance ancrée (chiffres ASCII uniquement).
- Le 29 février d'une année non bissextile a son propre message d'erreur.
- Une date candidate est reconstruite puis comparée composante par composante, afin qu'aucune date
  impossible ne soit « normalisée » en une date voisine (2019-02-29 -> 2019-03-01).

Toutes les fonctions sont pures et sans état partagé.
"""

import re
from dataclasses import dataclass

DATE_FORMAT_MESSAGE = "Invalid birthdate format. Use YYYY-MM-DD."
LEAP_DAY_MESSAGE = "Invalid date: February 29 on a non-leap year."
INVALID_DATE_MESSAGE = "Invalid date"

# `\d` accepterait les chiffres Unicode, d'où la classe explicite.
_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class DateError(ValueError):
    """Erreur de validation d'une date de naissance."""

    default_message = INVALID_DATE_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidFormatError(DateError):
    """La chaîne ne respecte pas le gabarit `YYYY-MM-DD`."""

    default_message = DATE_FORMAT_MESSAGE


class InvalidLeapDayError(DateError):
    """29 février demandé sur une année non bissextile."""

    default_message = LEAP_DAY_MESSAGE


class InvalidDateError(DateError):
    """Combinaison (année, mois, jour) impossible dans le calendrier."""

    default_message = INVALID_DATE_MESSAGE


@dataclass(frozen=True)
class CalendarDate:
    """Date validée (année, mois 1-12, jour 1-31 selon le mois)."""

    year: int
    month: int
    day: int

    def isoformat(self) -> str:
        """Re-sérialise la date au format `YYYY-MM-DD` complété de zéros."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def as_dict(self) -> dict[str, int]:
        return {"year": self.year, "month": self.month, "day": self.day}


def is_leap_year(year: int) -> bool:
    """
    Indique si l'année est bissextile (calendrier grégorien).

    Divisible par 4, sauf les années séculaires non divisibles par 400.
    """
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Nombre de jours du mois `month` (1-12) pour l'année `year`."""
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def _roll_over(year: int, month: int, day: int) -> tuple[int, int, int]:
    # Construction permissive: l'excédent de jours bascule sur les mois suivants.
    while day > days_in_month(year, month):
        day -= days_in_month(year, month)
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return year, month, day


def parse_date(raw: str) -> CalendarDate:
    """
    Analyse une date de naissance `YYYY-MM-DD` et la valide.

    Args:
        raw: Chaîne fournie par l'appelant (paramètre de requête par exemple).

    Returns:
        CalendarDate: Date validée.

    Raises:
        InvalidFormatError: Gabarit non respecté, ou mois/jour hors bornes numériques.
        InvalidLeapDayError: 29 février sur une année non bissextile.
        InvalidDateError: Jour inexistant pour ce mois (ex. 31 avril).
    """
    match = _DATE_RE.fullmatch(raw) if isinstance(raw, str) else None
    if match is None:
        raise InvalidFormatError()

    year, month, day = (int(group) for group in match.groups())
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise InvalidFormatError()

    if month == 2 and day == 29 and not is_leap_year(year):
        raise InvalidLeapDayError()

    if day > days_in_month(year, month):
        raise InvalidDateError()

    # Aller-retour: la date reconstruite doit restituer exactement les composantes demandées.
    if _roll_over(year, month, day) != (year, month, day):
        raise InvalidDateError()

    return CalendarDate(year=year, month=month, day=day)
