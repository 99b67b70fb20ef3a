"""Tests for envelope schema validation."""

import pytest

from tablestate.core.schemas import (
    EVENT_ENVELOPE,
    PROTO_ENVELOPE,
    SCHEMAS_DIR,
    check_envelope,
    load_schema,
)


class TestLoadSchema:
    def test_packaged_schemas_load(self):
        for name in (EVENT_ENVELOPE, PROTO_ENVELOPE):
            schema = load_schema(SCHEMAS_DIR / name)
            assert schema["type"] == "object"


class TestEventEnvelope:
    @pytest.mark.parametrize(
        "envelope",
        [
            {"type": "DealerPosMsg"},
            {"type": "DealerPosMsg", "data": {}},
            {"type": "DealerPosMsg", "data": None},
            {"type": "Anything", "data": {"nested": [1, 2]}, "extra": True},
        ],
    )
    def test_valid(self, envelope):
        assert check_envelope(envelope).valid is True

    @pytest.mark.parametrize(
        "envelope",
        [None, [], "x", {}, {"type": ""}, {"type": None}, {"type": "X", "data": 1}],
    )
    def test_invalid(self, envelope):
        check = check_envelope(envelope)
        assert check.valid is False
        assert check.error


class TestProtoEnvelope:
    def test_valid(self):
        assert check_envelope({"ns": "holdem", "topic": "PotsMsg", "data": {}}, PROTO_ENVELOPE).valid

    def test_ns_may_be_anything(self):
        assert check_envelope({"ns": 5, "topic": "PotsMsg"}, PROTO_ENVELOPE).valid

    def test_type_key_is_not_a_topic(self):
        assert not check_envelope({"type": "PotsMsg"}, PROTO_ENVELOPE).valid
