from src.models.webhook import (
    BRANDED,
    DEFAULT_HEADER_SCHEMES,
    UNBRANDED,
    HeaderScheme,
    SignatureToken,
    WebhookHeaders,
)

from .errors import InvalidSecretError, PayloadDecodeError, WebhookVerificationError
from .timestamp import WEBHOOK_TOLERANCE_IN_SECONDS, verify_timestamp
from .verifier import Webhook, create

__all__ = [
    "Webhook",
    "create",
    "verify_timestamp",
    "WEBHOOK_TOLERANCE_IN_SECONDS",
    "WebhookVerificationError",
    "InvalidSecretError",
    "PayloadDecodeError",
    "HeaderScheme",
    "BRANDED",
    "UNBRANDED",
    "DEFAULT_HEADER_SCHEMES",
    "SignatureToken",
    "WebhookHeaders",
]
