"""
Short code generation.

Codes are the first characters of a random (version 4) UUID in its
canonical string form. Uniqueness is probabilistic: nothing here checks
the store, collisions surface as a conflict when the mapping is saved.
"""

import uuid

SHORT_CODE_LENGTH = 8


def generate_code() -> str:
    """Return a new 8-character lowercase hex short code"""
    return str(uuid.uuid4())[:SHORT_CODE_LENGTH]
