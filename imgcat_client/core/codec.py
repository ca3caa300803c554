"""Base64 helpers for inline image sequences.

File names use the URL-safe alphabet so the ``name=`` field can never contain
``;``, ``:`` or the BEL terminator. The payload uses the standard alphabet.
Padding is kept in both cases.
"""

import base64


def encode_name(name: str) -> str:
    """Encode a display name (UTF-8) with the URL-safe alphabet."""
    return base64.urlsafe_b64encode(name.encode('utf-8', 'surrogateescape')).decode('ascii')


def decode_name(encoded: str) -> str:
    """Decode a name produced by encode_name."""
    return base64.urlsafe_b64decode(encoded).decode('utf-8', 'surrogateescape')


def encode_payload(data: bytes) -> str:
    """Encode image bytes with the standard alphabet."""
    return base64.standard_b64encode(data).decode('ascii')


def decode_payload(encoded: str) -> bytes:
    """Decode a payload produced by encode_payload."""
    return base64.standard_b64decode(encoded)
