import base64
import hashlib
import hmac


class HmacKey:
    """Imported HMAC-SHA256 key. Opaque to callers, reusable for any number of signatures."""

    __slots__ = ("_context",)

    def __init__(self, context):
        self._context = context

    def new(self):
        return self._context.copy()


class HmacSha256:
    """Keyed HMAC-SHA256 primitive backed by the standard library."""

    def import_key(self, raw: bytes) -> HmacKey:
        return HmacKey(hmac.new(bytes(raw), digestmod=hashlib.sha256))

    def sign(self, key: HmacKey, data: bytes) -> bytes:
        mac = key.new()
        mac.update(data)
        return mac.digest()


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64decode(value: str) -> bytes:
    """Decode standard base64, rejecting characters outside the alphabet.

    Missing trailing padding is restored first.
    """
    return base64.b64decode(value + "=" * (-len(value) % 4), validate=True)


def timing_safe_equal(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in constant time. Unequal lengths compare False."""
    return hmac.compare_digest(a, b)
