"""
Taxonomie des erreurs métier de la boutique.

Chaque erreur porte son code HTTP; la conversion en réponse JSON ({"error": message})
est faite une seule fois par storefront.app_setup.exceptions.
"""


class StorefrontError(Exception):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    status_code = 400
    default_message = "Invalid request"


class AuthError(StorefrontError):
    status_code = 401
    default_message = "Access denied"


class NotFoundError(StorefrontError):
    status_code = 404
    default_message = "Not found"


class InvalidAddress(StorefrontError):
    # L'adresse n'existe pas ou appartient à un autre utilisateur
    status_code = 400
    default_message = "Invalid address"


class PaymentLinkError(StorefrontError):
    status_code = 400
    default_message = "Payment URL could not be created"


class PersistenceError(StorefrontError):
    status_code = 500
    default_message = "Something went wrong"
