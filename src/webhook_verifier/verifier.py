import binascii
import json
import logging
import time
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any

from src.models.webhook import (
    BRANDED,
    DEFAULT_HEADER_SCHEMES,
    HeaderScheme,
    SignatureToken,
    WebhookHeaders,
)
from src.observability.metrics import VerificationMetrics
from src.utils.crypto import HmacSha256, b64decode, b64encode, timing_safe_equal
from src.webhook_verifier.errors import (
    InvalidSecretError,
    PayloadDecodeError,
    WebhookVerificationError,
)
from src.webhook_verifier.timestamp import to_seconds, verify_timestamp

logger = logging.getLogger(__name__)

SECRET_PREFIX = "whsec_"
SIGNATURE_VERSION = "v1"


def _decode_secret(secret: str | bytes) -> bytes:
    if not secret or not isinstance(secret, (str, bytes)):
        raise InvalidSecretError("Secret can't be empty.")
    if isinstance(secret, bytes):
        return secret
    if secret.startswith(SECRET_PREFIX):
        secret = secret[len(SECRET_PREFIX):]
    try:
        key = b64decode(secret)
    except (binascii.Error, ValueError) as e:
        raise InvalidSecretError(f"Secret is not valid base64: {e}") from e
    if not key:
        raise InvalidSecretError("Secret can't be empty.")
    return key


def _as_bytes(payload: str | bytes) -> bytes:
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return bytes(payload)


class Webhook:
    """Signs and verifies webhook messages using HMAC-SHA256 (Svix ``v1`` scheme).

    A string secret may carry the ``whsec_`` prefix and is base64 decoded;
    bytes are used as the raw key. The key is imported once and only read
    afterwards, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        secret: str | bytes,
        crypto: HmacSha256 | None = None,
        schemes: Iterable[HeaderScheme] = DEFAULT_HEADER_SCHEMES,
        metrics: VerificationMetrics | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self._crypto = crypto or HmacSha256()
        self._key = self._crypto.import_key(_decode_secret(secret))
        self.schemes = tuple(schemes)
        self.metrics = metrics
        self._clock = clock

    def sign(self, msg_id: str, timestamp: datetime | int | float, payload: str | bytes) -> str:
        """Return the ``v1,<base64>`` signature for a message."""
        to_sign = f"{msg_id}.{to_seconds(timestamp)}.".encode("utf-8") + _as_bytes(payload)
        signature = b64encode(self._crypto.sign(self._key, to_sign))
        return f"{SIGNATURE_VERSION},{signature}"

    def headers_for(
        self,
        msg_id: str,
        timestamp: datetime | int | float,
        payload: str | bytes,
        scheme: HeaderScheme = BRANDED,
    ) -> dict[str, str]:
        """Build the complete signed header set for a message under one naming scheme."""
        signature = self.sign(msg_id, timestamp, payload)
        return scheme.build(msg_id, to_seconds(timestamp), signature)

    def verify(
        self,
        payload: str | bytes,
        headers: Mapping[str, str],
        loads: Callable[[str | bytes], Any] | None = json.loads,
    ) -> Any:
        """Verify a received payload against its signature headers.

        Args:
            payload: The raw request body, exactly as received.
            headers: Request headers. Keys are matched case-insensitively.
            loads: Deserializer applied once the signature is accepted.
                Pass None to get the raw payload back.

        Returns:
            The deserialized payload.

        Raises:
            WebhookVerificationError: headers missing, bad or stale timestamp,
                or no presented signature matches.
            PayloadDecodeError: the signature is valid but ``loads`` failed.
        """
        try:
            self._verify_signature(payload, headers)
        except WebhookVerificationError as e:
            if self.metrics is not None:
                self.metrics.record_rejected(str(e))
            raise
        if self.metrics is not None:
            self.metrics.record_accepted()

        if loads is None:
            return payload
        try:
            return loads(payload)
        except (ValueError, RecursionError) as e:
            raise PayloadDecodeError(f"Verified payload could not be decoded: {e}") from e

    def _extract_headers(self, headers: Mapping[str, str]) -> WebhookHeaders:
        normalized = {key.lower(): value for key, value in headers.items()}
        for scheme in self.schemes:
            found = scheme.extract(normalized)
            if found is not None:
                return found
        logger.debug("Rejected webhook: no complete header set among %s",
                     [s.name for s in self.schemes])
        raise WebhookVerificationError("Missing required headers")

    def _verify_signature(self, payload: str | bytes, headers: Mapping[str, str]) -> None:
        found = self._extract_headers(headers)
        try:
            timestamp = verify_timestamp(found.timestamp, now=self._clock())
        except WebhookVerificationError as e:
            logger.debug("Rejected webhook %s: %s", found.msg_id, e)
            raise

        expected = SignatureToken.parse(self.sign(found.msg_id, timestamp, payload))
        expected_body = expected.body.encode("utf-8")

        candidates = 0
        for token in SignatureToken.parse_header(found.signature):
            if token.version != SIGNATURE_VERSION:
                continue
            candidates += 1
            if timing_safe_equal(token.body.encode("utf-8"), expected_body):
                return

        logger.debug("Rejected webhook %s: %d %s signature(s) presented, none matched",
                     found.msg_id, candidates, SIGNATURE_VERSION)
        raise WebhookVerificationError("No matching signature found")


def create(secret: str | bytes, crypto: HmacSha256 | None = None) -> Webhook:
    """Build a verifier from a secret, optionally with an alternate HMAC primitive."""
    return Webhook(secret, crypto=crypto)
