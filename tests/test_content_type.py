"""Tests for Content-Type parsing and image/markup classification."""
import pytest

from unfurler.services.content_type import (
    ContentKind,
    MediaTypeError,
    charset_of,
    classify,
    parse_media_type,
)


class TestParseMediaType:
    def test_type_and_subtype(self):
        """A bare type/subtype has no parameters."""
        media_type = parse_media_type("text/html")
        assert media_type.type == "text"
        assert media_type.subtype == "html"
        assert media_type.parameters == {}

    def test_parameters_are_lowercased_and_unquoted(self):
        """Names are lower-cased and quoted values unquoted."""
        media_type = parse_media_type('Text/HTML; Charset="UTF-8"; boundary=x')
        assert media_type.type == "text"
        assert media_type.subtype == "html"
        assert media_type.parameters == {"charset": "UTF-8", "boundary": "x"}
        assert media_type.charset == "UTF-8"

    @pytest.mark.parametrize(
        "value",
        ["text/html;;charset=UTF-8", "html", "text/", "/html", "text/html; charset", ""],
    )
    def test_rejects_malformed_values(self, value):
        """Values outside the media type grammar raise."""
        with pytest.raises(MediaTypeError):
            parse_media_type(value)


class TestClassify:
    @pytest.mark.parametrize(
        "value",
        ["image/jpg", "image/png", "IMAGE/GIF", "image/svg+xml", "image/webp; q=1"],
    )
    def test_image_types(self, value):
        """Any image/* type is classified as an image."""
        assert classify(value) is ContentKind.IMAGE

    @pytest.mark.parametrize(
        "value",
        ["text/html", "application/xhtml+xml", "application/json", "video/mp4"],
    )
    def test_other_types_are_markup(self, value):
        """Non-image types are treated as markup."""
        assert classify(value) is ContentKind.MARKUP

    def test_absent_header_is_markup(self):
        """A missing header means markup."""
        assert classify(None) is ContentKind.MARKUP
        assert classify("") is ContentKind.MARKUP

    def test_unparsable_header_is_markup(self):
        """A malformed header means markup, even when it starts with image/."""
        assert classify("image/jpg;;x=1") is ContentKind.MARKUP
        assert classify("text/html;;charset=UTF-8") is ContentKind.MARKUP


class TestCharsetOf:
    def test_charset(self):
        """The charset parameter is returned as given."""
        assert charset_of("text/html; charset=ISO-8859-1") == "ISO-8859-1"

    def test_missing_or_invalid(self):
        """No charset for absent, charset-less or malformed headers."""
        assert charset_of("text/html") is None
        assert charset_of(None) is None
        assert charset_of("text/html;;charset=UTF-8") is None
