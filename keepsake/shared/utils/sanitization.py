"""Input sanitization utilities."""

import base64
import binascii
import os
import re


class InputSanitizer:
    """Sanitize user-supplied upload inputs."""

    # Extensions kept from client filenames
    EXTENSION_PATTERN = re.compile(r"^\.[A-Za-z0-9]{1,10}$")

    # data:<mime>;base64,<payload>
    DATA_URL_PATTERN = re.compile(r"^data:(.+);base64,(.+)$")

    DEFAULT_EXTENSION = ".png"

    @classmethod
    def sanitize_extension(cls, filename: str) -> str:
        """
        Extract a safe file extension from a client filename.

        Only short alphanumeric extensions are kept; anything else falls
        back to DEFAULT_EXTENSION.
        """
        _, ext = os.path.splitext(filename or "")
        if not cls.EXTENSION_PATTERN.match(ext):
            return cls.DEFAULT_EXTENSION
        return ext

    @classmethod
    def decode_data_url(cls, value: str) -> tuple[str, bytes]:
        """
        Split a base64 data URL into its MIME type and decoded bytes.

        Raises:
            ValueError: If the value is not a base64 data URL
        """
        match = cls.DATA_URL_PATTERN.match(value or "")
        if not match:
            raise ValueError("Invalid dataUrl")

        mime_type, payload = match.group(1), match.group(2)
        try:
            content = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("dataUrl payload is not valid base64") from e

        return mime_type, content


def sanitize_extension(filename: str) -> str:
    """Return a safe extension for an uploaded file."""
    return InputSanitizer.sanitize_extension(filename)


def decode_data_url(value: str) -> tuple[str, bytes]:
    """Decode a base64 data URL."""
    return InputSanitizer.decode_data_url(value)
