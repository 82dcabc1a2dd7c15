"""Self-contained data URIs (RFC 2397, base64 flavour only)."""

import base64
import binascii


def encode_data_uri(media_type: str, payload: str | bytes) -> str:
    """Wrap a payload as data:<media_type>;base64,<payload>."""
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    return f"data:{media_type};base64,{base64.b64encode(payload).decode('ascii')}"


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into its media type and decoded payload.

    Raises:
        ValueError: The string is not a base64 data URI
    """
    if not uri.startswith("data:"):
        raise ValueError("Not a data URI: missing 'data:' scheme")

    header, sep, body = uri[len("data:"):].partition(",")
    if not sep or not header.endswith(";base64"):
        raise ValueError("Only base64-encoded data URIs are supported")

    try:
        payload = base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e

    return header[: -len(";base64")], payload
