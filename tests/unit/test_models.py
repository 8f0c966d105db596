import pytest

from src.models.webhook import BRANDED, DEFAULT_HEADER_SCHEMES, UNBRANDED, SignatureToken, WebhookHeaders


class TestSignatureToken:
    """Tests for SignatureToken parsing."""

    @pytest.mark.unit
    def test_parse_splits_on_first_comma(self):
        token = SignatureToken.parse("v1,abc,def")
        assert token.version == "v1"
        assert token.body == "abc,def"

    @pytest.mark.unit
    def test_parse_without_comma_has_empty_body(self):
        token = SignatureToken.parse("v1")
        assert token == SignatureToken(version="v1", body="")

    @pytest.mark.unit
    def test_parse_header_splits_on_single_spaces(self):
        tokens = SignatureToken.parse_header("v1,a v2,b  v1,c")
        assert [t.version for t in tokens] == ["v1", "v2", "", "v1"]
        assert [t.body for t in tokens] == ["a", "b", "", "c"]

    @pytest.mark.unit
    def test_str_restores_token(self):
        assert str(SignatureToken.parse("v1,Zm9v")) == "v1,Zm9v"


class TestHeaderScheme:
    """Tests for HeaderScheme lookup and building."""

    @pytest.mark.unit
    def test_default_order_is_branded_then_unbranded(self):
        assert DEFAULT_HEADER_SCHEMES == (BRANDED, UNBRANDED)

    @pytest.mark.unit
    def test_extract_returns_triple(self):
        found = UNBRANDED.extract({
            "webhook-id": "msg_1",
            "webhook-timestamp": "1",
            "webhook-signature": "v1,x",
        })
        assert found == WebhookHeaders(msg_id="msg_1", timestamp="1", signature="v1,x")

    @pytest.mark.unit
    def test_extract_returns_none_when_incomplete(self):
        assert BRANDED.extract({"svix-id": "msg_1", "svix-timestamp": "1"}) is None

    @pytest.mark.unit
    def test_extract_expects_lowercase_keys(self):
        assert BRANDED.extract({"Svix-Id": "a", "Svix-Timestamp": "1", "Svix-Signature": "s"}) is None

    @pytest.mark.unit
    def test_build_stringifies_timestamp(self):
        assert BRANDED.build("msg_1", 42, "v1,x") == {
            "svix-id": "msg_1",
            "svix-timestamp": "42",
            "svix-signature": "v1,x",
        }
