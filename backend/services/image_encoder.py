"""Convert image files to (mime type, base64 payload) pairs and back."""
import base64
import binascii
import io
import os
from typing import BinaryIO, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel

from core.errors import ReadError

ImageSource = Union[str, os.PathLike, bytes, BinaryIO]


class EncodedImage(BaseModel):
    mime_type: str
    data: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"

    @classmethod
    def from_data_url(cls, data_url: str) -> "EncodedImage":
        if not data_url.startswith("data:") or ";base64," not in data_url:
            raise ReadError("Not a base64 data URL")
        header, payload = data_url.split(";base64,", 1)
        mime_type = header[len("data:"):].strip()
        if not mime_type:
            raise ReadError("Data URL has no mime type")
        return cls(mime_type=mime_type, data=payload)


def _read_bytes(source: ImageSource) -> bytes:
    try:
        if isinstance(source, bytes):
            return source
        if isinstance(source, (str, os.PathLike)):
            with open(source, "rb") as f:
                return f.read()
        return source.read()
    except OSError as e:
        raise ReadError(f"Could not read image: {e}")


def detect_mime_type(raw: bytes) -> str:
    """Identify the image format from its header bytes."""
    try:
        with Image.open(io.BytesIO(raw)) as im:
            im.verify()
            mime = Image.MIME.get(im.format or "")
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ReadError(f"Unreadable or corrupt image: {e}")
    if not mime:
        raise ReadError("Unrecognized image format")
    return mime


def encode_image(source: ImageSource, mime_type: Optional[str] = None) -> EncodedImage:
    """
    Encode an image for transport in a JSON body.

    Args:
        source: file path, raw bytes, or a binary file object
        mime_type: explicit mime type; detected from the bytes when omitted

    Returns:
        EncodedImage with the mime type and the base64 payload (no header)

    Raises:
        ReadError: if the source cannot be read or is not an image
    """
    raw = _read_bytes(source)
    if not raw:
        raise ReadError("Image is empty")
    if not mime_type:
        mime_type = detect_mime_type(raw)
    return EncodedImage(mime_type=mime_type, data=base64.b64encode(raw).decode("ascii"))


def decode_data_url(data_url: str) -> Tuple[str, bytes]:
    """Return (mime type, raw bytes) for a base64 data URL."""
    encoded = EncodedImage.from_data_url(data_url)
    try:
        return encoded.mime_type, base64.b64decode(encoded.data, validate=True)
    except (binascii.Error, ValueError):
        raise ReadError("Invalid base64 payload")
