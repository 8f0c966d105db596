from .webhook import (
    BRANDED,
    DEFAULT_HEADER_SCHEMES,
    UNBRANDED,
    HeaderScheme,
    SignatureToken,
    WebhookHeaders,
)

__all__ = [
    "HeaderScheme", "BRANDED", "UNBRANDED", "DEFAULT_HEADER_SCHEMES",
    "SignatureToken", "WebhookHeaders",
]
