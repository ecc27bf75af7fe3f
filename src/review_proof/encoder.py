import base64
import mimetypes
from pathlib import Path

from review_proof.errors import EncodeError

# Guidance shown next to the file picker; never enforced.
SOFT_SIZE_LIMIT = 10 * 1024 * 1024

READ_FAILED = "Failed to read file as Base64 string."


def to_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def strip_data_url_header(url: str) -> str:
    """Drop the ``data:<mime>;base64,`` segment, keeping only the payload text."""
    _, sep, body = url.partition(",")
    if not sep:
        raise EncodeError(READ_FAILED)
    return body


def file_to_base64(path) -> str:
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as e:
        raise EncodeError(READ_FAILED) from e
    mime, _ = mimetypes.guess_type(p.name)
    return strip_data_url_header(to_data_url(data, mime or "application/octet-stream"))


def exceeds_soft_limit(path) -> bool:
    try:
        return Path(path).stat().st_size > SOFT_SIZE_LIMIT
    except OSError:
        return False
