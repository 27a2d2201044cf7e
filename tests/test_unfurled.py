"""Tests for the Unfurled result model."""
import pydantic
import pytest

from unfurler.schemas.unfurl import Media, UnfurlRequest, Unfurled, UnfurlType

PAGE_URL = "http://foobar.com/baz?qux"


class TestUnfurled:
    def test_defaults(self):
        """Only url is required; canonical_url defaults to it."""
        unfurled = Unfurled(url=PAGE_URL)
        assert unfurled.canonical_url == PAGE_URL
        assert unfurled.type is UnfurlType.TEXT
        assert unfurled.title == ""
        assert unfurled.description == ""
        assert unfurled.image is None
        assert unfurled.video is None

    def test_is_empty_when_empty(self):
        """A bare result is empty."""
        assert Unfurled(url=PAGE_URL).is_empty()

    def test_is_empty_ignores_url_canonical_and_type(self):
        """url, canonical_url and type do not count towards emptiness."""
        unfurled = Unfurled(url=PAGE_URL, canonical_url="http://other.com", type=UnfurlType.IMAGE)
        assert unfurled.is_empty()

    @pytest.mark.parametrize(
        "fields",
        [
            {"title": "The title"},
            {"description": "Some description"},
            {"image": Media(url="http://foobar.com/i.png")},
            {"video": Media(url="http://foobar.com/v.mp4")},
        ],
    )
    def test_not_empty_when_anything_found(self, fields):
        """Any found field makes the result non-empty."""
        assert not Unfurled(url=PAGE_URL, **fields).is_empty()

    def test_image_without_url_still_counts(self):
        """An image counts even if its URL is blank."""
        assert not Unfurled(url=PAGE_URL, image=Media(url="")).is_empty()

    def test_blank_canonical_falls_back_to_url(self):
        """A blank canonical_url is replaced by url."""
        assert Unfurled(url=PAGE_URL, canonical_url="").canonical_url == PAGE_URL

    def test_json_uses_camel_case(self):
        """JSON output uses canonicalUrl and keeps null media."""
        data = Unfurled(url=PAGE_URL, title="T").model_dump(mode="json", by_alias=True)
        assert data == {
            "url": PAGE_URL,
            "canonicalUrl": PAGE_URL,
            "type": "TEXT",
            "title": "T",
            "description": "",
            "image": None,
            "video": None,
        }

    def test_accepts_camel_case_input(self):
        """canonicalUrl is accepted on input."""
        unfurled = Unfurled.model_validate({"url": PAGE_URL, "canonicalUrl": "http://c.com"})
        assert unfurled.canonical_url == "http://c.com"

    def test_is_immutable(self):
        """Results cannot be modified after creation."""
        unfurled = Unfurled(url=PAGE_URL)
        with pytest.raises(pydantic.ValidationError):
            unfurled.title = "changed"


class TestUnfurlRequest:
    def test_adds_https_when_scheme_missing(self):
        """A schemeless URL is stripped and given https://."""
        assert UnfurlRequest(url=" example.com/a ").url == "https://example.com/a"

    def test_keeps_existing_scheme(self):
        """An http URL is left alone."""
        assert UnfurlRequest(url="http://example.com").url == "http://example.com"
