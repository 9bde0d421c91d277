"""Display helpers for tokens and timestamps."""

import base64
import json
from datetime import datetime
from typing import Optional
from .models import TokenClaims

UNKNOWN = "unknown"
ELLIPSIS = "..."


def parse_claims(token: str) -> Optional[TokenClaims]:
    """Decode the payload segment of a bearer token.

    Signatures are not verified. Returns None for anything that cannot be
    decoded into a claim set, whatever the reason.
    """
    try:
        payload = token.split(".")[1]
        payload = payload.replace("+", "-").replace("/", "_")
        payload += "=" * (-len(payload) % 4)
        data = json.loads(base64.urlsafe_b64decode(payload).decode("utf-8"))
        if not isinstance(data, dict):
            return None
        return TokenClaims.model_validate(data)
    except (AttributeError, IndexError, ValueError):
        return None


def truncate(value: Optional[str], length: int = 10) -> str:
    """Keep the first `length` characters followed by an ellipsis."""
    if not value:
        return UNKNOWN
    return value[:length] + ELLIPSIS


def format_timestamp(timestamp: Optional[float]) -> str:
    """Format epoch seconds as local 'MM/DD/YYYY, HH:MM'."""
    if timestamp is None:
        return UNKNOWN
    try:
        return datetime.fromtimestamp(timestamp).strftime("%m/%d/%Y, %H:%M")
    except (OverflowError, OSError, ValueError):
        return UNKNOWN
