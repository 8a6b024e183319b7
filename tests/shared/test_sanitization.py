import base64

import pytest

from keepsake.shared.utils.sanitization import (InputSanitizer,
                                               decode_data_url,
                                               sanitize_extension)


class TestSanitizeExtension:
    """Tests for extension extraction from client filenames."""

    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("photo.jpg", ".jpg"),
            ("IMG_0001.JPEG", ".JPEG"),
            ("archive.tar.gz", ".gz"),
            ("noext", ".png"),
            ("", ".png"),
            ("evil.p/ng", ".png"),
            ("../../x.sh;rm", ".png"),
            ("weird.verylongextension", ".png"),
        ],
    )
    def test_sanitize_extension(self, filename, expected):
        assert sanitize_extension(filename) == expected


class TestDecodeDataUrl:
    """Tests for base64 data URL decoding."""

    def test_decode_valid_data_url(self):
        payload = base64.b64encode(b"\x89PNG fake").decode()

        mime_type, content = decode_data_url(f"data:image/png;base64,{payload}")

        assert mime_type == "image/png"
        assert content == b"\x89PNG fake"

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "not a data url",
            "data:image/png,plain",
            "data:image/png;base64,",
            "data:image/png;base64,@@@not-base64@@@",
        ],
    )
    def test_decode_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            InputSanitizer.decode_data_url(value)
