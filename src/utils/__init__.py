from .crypto import HmacKey, HmacSha256, b64decode, b64encode, timing_safe_equal

__all__ = [
    "HmacKey", "HmacSha256",
    "b64encode", "b64decode", "timing_safe_equal",
]
