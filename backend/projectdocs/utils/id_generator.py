"""ID generation utilities."""

import uuid


def generate_id(prefix: str = "") -> str:
    """Generate a unique record ID.

    Example: generate_id("fld") -> "fld_3f9c2a7b1e04"
    """
    token = uuid.uuid4().hex[:12]
    return f"{prefix}_{token}" if prefix else token
