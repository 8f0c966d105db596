import base64
import json
import os
import time
import uuid

from src.models.webhook import BRANDED, HeaderScheme
from src.webhook_verifier.verifier import Webhook


class MessageFactory:
    """Factory for creating webhook secrets, payloads and signed header sets."""

    @staticmethod
    def create_secret(prefixed: bool = True, length: int = 24) -> str:
        encoded = base64.b64encode(os.urandom(length)).decode("ascii")
        return f"whsec_{encoded}" if prefixed else encoded

    @staticmethod
    def create_msg_id() -> str:
        return f"msg_{uuid.uuid4().hex[:24]}"

    @staticmethod
    def create_payload(event_type: str = "invoice.paid", **overrides) -> str:
        body = {
            "type": event_type,
            "data": {
                "id": f"inv_{uuid.uuid4().hex[:12]}",
                "amount": 2500,
                "currency": "usd",
            },
        }
        body.update(overrides)
        return json.dumps(body)

    @staticmethod
    def create_headers(
        webhook: Webhook,
        payload: str | bytes,
        scheme: HeaderScheme = BRANDED,
        **overrides,
    ) -> dict[str, str]:
        """Sign ``payload`` now and return the headers for ``scheme``.

        ``msg_id`` and ``timestamp`` may be overridden; any other override
        replaces the named header value after signing.
        """
        msg_id = overrides.pop("msg_id", None) or MessageFactory.create_msg_id()
        timestamp = overrides.pop("timestamp", None)
        if timestamp is None:
            timestamp = int(time.time())

        headers = webhook.headers_for(msg_id, timestamp, payload, scheme=scheme)
        headers.update(overrides)
        return headers
