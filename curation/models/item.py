"""
Item model: a candidate piece of content supplied by the search client.

Used by the content pool, the heuristic filter, the feature extractor, and the
filter & rank pipeline. Built from search-client dicts via Item.model_validate(d)
or Item.from_api(d) when titles arrive HTML-escaped.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from curation.utils.text import decode_html_entities


def _count_to_str(value: Any) -> Optional[str]:
    """Counts are kept as strings; None and blank mean unknown."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("count must be numeric")
    if isinstance(value, (int, float)):
        return str(int(value))
    text = str(value).strip()
    return text or None


class Item(BaseModel):
    """
    A candidate item. `id` is the sole identity key across pool and feedback.

    view_count / like_count are numeric strings; None means "unknown", not zero.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str = ""
    description: str = ""
    thumbnail: str = ""
    channel_title: str = ""
    published_at: str = ""
    view_count: Optional[str] = None
    like_count: Optional[str] = None
    url: str = ""

    @field_validator("view_count", "like_count", mode="before")
    @classmethod
    def _normalize_count(cls, value: Any) -> Optional[str]:
        return _count_to_str(value)

    @field_validator("title", "description", "thumbnail", "channel_title", "published_at", "url", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Item":
        """Build an Item from a search-client payload, decoding HTML entities in text fields."""
        data = dict(payload)
        for key in ("title", "description", "channel_title"):
            if isinstance(data.get(key), str):
                data[key] = decode_html_entities(data[key])
        return cls.model_validate(data)


class PoolEntry(BaseModel):
    """An Item admitted to the content pool, with its admission time and sequence."""

    item: Item
    inserted_at: datetime
    seq: int = 0
