class WebhookVerificationError(Exception):
    """Raised for every verification failure. The message names the reason."""


class InvalidSecretError(ValueError):
    """Raised when a verifier cannot be built from the given secret."""


class PayloadDecodeError(ValueError):
    """Raised when a payload with a valid signature cannot be deserialized."""
