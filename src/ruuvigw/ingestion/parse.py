"""Gateway request parsing.

Wraps JSON decoding and Pydantic validation so the HTTP layer only has
one exception type to map to a ``400`` response.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from ruuvigw.exceptions import EnvelopeError
from ruuvigw.models.envelope import GatewayEnvelope, GatewayMessage


def parse_gateway_payload(payload: Any) -> GatewayMessage:
    """Validate an already-decoded JSON document."""
    try:
        return GatewayEnvelope.model_validate(payload).data
    except ValidationError as exc:
        raise EnvelopeError(f"Invalid gateway message: {exc.error_count()} validation error(s)\n{exc}") from exc


def parse_gateway_request(body: str | bytes) -> GatewayMessage:
    """Decode and validate a raw request body."""
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise EnvelopeError(f"Request body is not valid JSON: {exc}") from exc
    return parse_gateway_payload(payload)
