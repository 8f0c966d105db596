from collections.abc import Mapping
from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True)
class HeaderScheme:
    """Names of the three headers carrying a signed message, for one naming convention."""

    name: str
    id_header: str
    timestamp_header: str
    signature_header: str

    def extract(self, headers: Mapping[str, str]) -> "WebhookHeaders | None":
        """Read this scheme's triple from lower-cased headers. None unless all three are set."""
        msg_id = headers.get(self.id_header)
        timestamp = headers.get(self.timestamp_header)
        signature = headers.get(self.signature_header)
        if not msg_id or not timestamp or not signature:
            return None
        return WebhookHeaders(msg_id=msg_id, timestamp=timestamp, signature=signature)

    def build(self, msg_id: str, timestamp: int, signature: str) -> dict[str, str]:
        return {
            self.id_header: msg_id,
            self.timestamp_header: str(timestamp),
            self.signature_header: signature,
        }


BRANDED = HeaderScheme("svix", "svix-id", "svix-timestamp", "svix-signature")
UNBRANDED = HeaderScheme("webhook", "webhook-id", "webhook-timestamp", "webhook-signature")

DEFAULT_HEADER_SCHEMES = (BRANDED, UNBRANDED)


@dataclass(frozen=True)
class WebhookHeaders:
    msg_id: str
    timestamp: str  # seconds since epoch, unparsed
    signature: str  # space separated tokens


@dataclass(frozen=True)
class SignatureToken:
    version: str
    body: str

    @classmethod
    def parse(cls, token: str) -> Self:
        version, _, body = token.partition(",")
        return cls(version=version, body=body)

    @classmethod
    def parse_header(cls, value: str) -> list[Self]:
        return [cls.parse(token) for token in value.split(" ")]

    def __str__(self) -> str:
        return f"{self.version},{self.body}"
