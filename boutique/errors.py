"""
Taxonomie des erreurs métier.
Chaque erreur porte son code HTTP; la conversion en réponse est faite par
boutique.app_setup.exception_handlers.
"""


class BoutiqueError(Exception):
    status_code = 500
    default_message = "Erreur interne"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BoutiqueError):
    status_code = 400
    default_message = "Requête invalide"


class EmptyCart(ValidationError):
    default_message = "Panier vide"


class NoValidProducts(ValidationError):
    default_message = "Produits introuvables"


class InvalidProductForm(ValidationError):
    default_message = "Formulaire produit invalide"


class ProviderUnavailable(BoutiqueError):
    status_code = 500
    default_message = "Stripe non configuré"


class CheckoutFailed(BoutiqueError):
    status_code = 500
    default_message = "Erreur de checkout"


class WebhookError(BoutiqueError):
    status_code = 400
    default_message = "Webhook invalide"


class InvalidSignature(WebhookError):
    default_message = "Signature invalide"


class MalformedEvent(WebhookError):
    default_message = "Evénement illisible"


class StorageError(BoutiqueError):
    status_code = 500
    default_message = "Erreur de stockage"
