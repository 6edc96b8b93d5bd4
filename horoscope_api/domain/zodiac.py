"""
Correspondance date -> signe du zodiaque occidental et animal du zodiaque chinois.

Les tables sont des tuples construits une fois à l'import. Les fonctions sont totales sur des
entrées issues de `parse_date`: appeler `sign_for`/`get_zodiac` avec un mois ou un jour hors bornes
est hors contrat et le résultat n'est pas défini.
"""

from bisect import bisect_right
from dataclasses import dataclass

from horoscope_api.domain.dates import CalendarDate

# Premier jour de chaque signe, dans l'ordre du calendrier.
_SIGN_CUTOVERS = (
    ((1, 20), "Aquarius"),
    ((2, 19), "Pisces"),
    ((3, 21), "Aries"),
    ((4, 20), "Taurus"),
    ((5, 21), "Gemini"),
    ((6, 21), "Cancer"),
    ((7, 23), "Leo"),
    ((8, 23), "Virgo"),
    ((9, 23), "Libra"),
    ((10, 23), "Scorpio"),
    ((11, 22), "Sagittarius"),
    ((12, 22), "Capricorn"),
)
_CUTOVER_KEYS = tuple(start for start, _ in _SIGN_CUTOVERS)
_CUTOVER_SIGNS = tuple(sign for _, sign in _SIGN_CUTOVERS)

WESTERN_SIGNS = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)

CHINESE_ANIMALS = (
    "Rat",
    "Ox",
    "Tiger",
    "Rabbit",
    "Dragon",
    "Snake",
    "Horse",
    "Goat",
    "Monkey",
    "Rooster",
    "Dog",
    "Pig",
)
# 2020 est une année du Rat (index 0).
CHINESE_CYCLE_BASE_YEAR = 2020


@dataclass(frozen=True)
class ZodiacResult:
    """Signe occidental et animal chinois calculés pour une date."""

    sign: str
    animal: str


def sign_for(month: int, day: int) -> str:
    """
    Retourne le signe occidental pour un couple (mois, jour) validé.

    Du 1er au 19 janvier, aucune borne n'est atteinte: l'index -1 renvoie le Capricorne commencé
    le 22 décembre.
    """
    idx = bisect_right(_CUTOVER_KEYS, (month, day)) - 1
    return _CUTOVER_SIGNS[idx]


def animal_for(year: int) -> str:
    """Retourne l'animal chinois de l'année (cycle de 12 ans, toute année entière)."""
    return CHINESE_ANIMALS[(year - CHINESE_CYCLE_BASE_YEAR) % 12]


def get_zodiac(year: int, month: int, day: int) -> ZodiacResult:
    """
    Calcule le signe et l'animal pour des composantes déjà validées.

    Précondition: `(year, month, day)` provient d'une `CalendarDate` produite par `parse_date`.
    """
    return ZodiacResult(sign=sign_for(month, day), animal=animal_for(year))


def zodiac_for_date(birthdate: CalendarDate) -> ZodiacResult:
    """Raccourci de `get_zodiac` pour une `CalendarDate`."""
    return get_zodiac(birthdate.year, birthdate.month, birthdate.day)
