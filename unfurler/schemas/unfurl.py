from enum import Enum
from typing import Any

from pydantic import BaseModel, field_validator, model_validator
from pydantic.alias_generators import to_camel


def _normalize_url(url: str) -> str:
    """Prepend https:// if no protocol is present."""
    url = url.strip()
    if url and not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url


class UnfurlType(str, Enum):
    TEXT = "TEXT"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"


class Media(BaseModel):
    """An image or video referenced by a preview."""

    model_config = {"frozen": True}

    url: str
    width: int = 0
    height: int = 0


class Unfurled(BaseModel):
    """Preview of a single URL.

    ``title`` and ``description`` are empty strings when nothing was found;
    ``image`` and ``video`` are ``None``. ``canonical_url`` falls back to
    ``url``. Serialises with camelCase keys (``canonicalUrl``).
    """

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    url: str
    canonical_url: str = ""
    type: UnfurlType = UnfurlType.TEXT
    title: str = ""
    description: str = ""
    image: Media | None = None
    video: Media | None = None

    @model_validator(mode="before")
    @classmethod
    def _default_canonical_url(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("canonical_url") or data.get("canonicalUrl"):
            return data
        data = {k: v for k, v in data.items() if k not in ("canonical_url", "canonicalUrl")}
        data["canonical_url"] = data.get("url", "")
        return data

    def is_empty(self) -> bool:
        """True if nothing was found: no title, description, image or video."""
        return (
            not self.title
            and not self.description
            and self.image is None
            and self.video is None
        )


class UnfurlResponse(BaseModel):
    success: bool
    empty: bool
    data: Unfurled


class UnfurlRequest(BaseModel):
    url: str

    @field_validator("url", mode="before")
    @classmethod
    def _add_protocol(cls, v: str) -> str:
        return _normalize_url(v)
