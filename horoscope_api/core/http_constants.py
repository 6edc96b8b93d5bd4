"""Constantes HTTP pour éviter les valeurs magiques dans le code.

Ce module définit les codes de statut HTTP utilisés par l'API horoscope ainsi que les messages
d'erreur exposés tels quels aux clients.
"""

# Codes de statut HTTP courants
HTTP_OK = 200
HTTP_CREATED = 201
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409
HTTP_TOO_MANY_REQUESTS = 429
HTTP_INTERNAL_SERVER_ERROR = 500

# Messages publics (contrat avec les clients existants)
MSG_BIRTHDATE_REQUIRED = "Birthdate query parameter is required."
MSG_UNAUTHORIZED = "Unauthorized"
MSG_INVALID_TOKEN = "Invalid token"
MSG_API_KEY_REQUIRED = "API key is required"
MSG_INVALID_API_KEY = "Invalid API key"
MSG_RATE_LIMITED = "Too many requests, please try again later."
MSG_INTERNAL_ERROR = "Something went wrong!"
