"""Schema loading and envelope validation.

Envelopes are checked against the JSON Schemas shipped in
``tablestate/schemas``. Validation only answers "is this shaped like an
event"; payload contents are the transitions' business.
"""

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import jsonschema
from jsonschema.exceptions import best_match

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"

EVENT_ENVELOPE = "event_envelope.json"
PROTO_ENVELOPE = "proto_envelope.json"


def load_schema(path: Path) -> dict:
    """Load a JSON Schema file and return as dict."""
    with open(path) as f:
        return json.load(f)


@lru_cache(maxsize=None)
def _validator(name: str) -> jsonschema.Draft7Validator:
    schema = load_schema(SCHEMAS_DIR / name)
    jsonschema.Draft7Validator.check_schema(schema)
    return jsonschema.Draft7Validator(schema)


@dataclass(frozen=True)
class EnvelopeCheck:
    """Result of validating an incoming envelope."""

    valid: bool
    error: str | None = None


def check_envelope(envelope, schema_name: str = EVENT_ENVELOPE) -> EnvelopeCheck:
    """Validate ``envelope`` against a packaged envelope schema.

    Never raises; an invalid envelope is reported with the first
    validation message.
    """
    error = best_match(_validator(schema_name).iter_errors(envelope))
    if error is not None:
        return EnvelopeCheck(valid=False, error=error.message)
    return EnvelopeCheck(valid=True)
