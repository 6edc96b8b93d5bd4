"""
Exceptions métier de l'API horoscope.

Chaque exception porte un message destiné au client et le code HTTP associé; la traduction en
réponse JSON est faite par les gestionnaires de `horoscope_api.apigw.errors`.
"""

from horoscope_api.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_CONFLICT,
    HTTP_FORBIDDEN,
    HTTP_NOT_FOUND,
    HTTP_UNAUTHORIZED,
)


class HoroscopeError(Exception):
    """Erreur applicative avec message public et code HTTP."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(HoroscopeError):
    def __init__(self, message: str = "Invalid input") -> None:
        super().__init__(message, HTTP_BAD_REQUEST)


class UnauthorizedError(HoroscopeError):
    def __init__(self, message: str = "Unauthorized access") -> None:
        super().__init__(message, HTTP_UNAUTHORIZED)


class ForbiddenError(HoroscopeError):
    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, HTTP_FORBIDDEN)


class NotFoundError(HoroscopeError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, HTTP_NOT_FOUND)


class ConflictError(HoroscopeError):
    def __init__(self, message: str = "Conflict occurred") -> None:
        super().__init__(message, HTTP_CONFLICT)
