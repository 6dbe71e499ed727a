"""
Taxonomie des erreurs métier (réservations / paiements).

Chaque erreur porte un code HTTP et un message générique destiné au client.
Les détails (identifiants passerelle, cause technique) restent dans les logs:
le message public ne contient jamais de secret, de signature calculée ni de trace.
Le mapping HTTP est fait dans eventpay.app_setup.exceptions.
"""


class BookingServiceError(Exception):
    status_code = 500
    message = "Something went wrong"

    def __init__(self, message: str | None = None):
        if message:
            self.message = message
        super().__init__(self.message)


class ValidationError(BookingServiceError):
    status_code = 400
    message = "All fields are required"


class MissingFieldsError(ValidationError):
    message = "Payment verification data missing"


class InvalidPackageError(BookingServiceError):
    status_code = 400
    message = "Invalid package selected"


class SignatureMismatchError(BookingServiceError):
    status_code = 400
    message = "Payment verification failed"


class NotFoundError(BookingServiceError):
    status_code = 404
    message = "Booking not found"


class GatewayError(BookingServiceError):
    status_code = 500
    message = "Failed to create payment order"


class PersistenceError(BookingServiceError):
    status_code = 500
    message = "Payment verification failed"


class DuplicateTokenError(Exception):
    """Conflit d'unicité sur bookings.token (code Postgres 23505). Interne: déclenche un nouveau tirage."""
