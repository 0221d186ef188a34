"""
Feedback models: binary sentiment labels with a metadata snapshot.

The snapshot is captured when the user labels an item and may be stale relative
to the live Item. Every field is individually optional.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .item import Item, _count_to_str


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"

    @classmethod
    def parse(cls, value: Union[str, "Sentiment"]) -> "Sentiment":
        """Accept a Sentiment or its string value; raise ValueError otherwise."""
        if isinstance(value, Sentiment):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"unknown sentiment: {value!r} (expected 'positive' or 'negative')")


class ItemMetadata(BaseModel):
    """Subset of Item fields captured at labeling time."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    channel_title: Optional[str] = None
    published_at: Optional[str] = None
    view_count: Optional[str] = None
    like_count: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_item(cls, item: Item) -> "ItemMetadata":
        return cls(
            title=item.title or None,
            description=item.description or None,
            channel_title=item.channel_title or None,
            published_at=item.published_at or None,
            view_count=_count_to_str(item.view_count),
            like_count=_count_to_str(item.like_count),
            url=item.url or None,
        )


class FeedbackRecord(BaseModel):
    """At most one record per item id; a new sentiment replaces the old record."""

    id: str
    sentiment: Sentiment
    metadata: ItemMetadata = Field(default_factory=ItemMetadata)
    recorded_at: Optional[datetime] = None

    def as_item(self) -> Item:
        """View the snapshot as an Item so it can go through feature extraction."""
        m = self.metadata
        return Item(
            id=self.id,
            title=m.title or "",
            description=m.description or "",
            channel_title=m.channel_title or "",
            published_at=m.published_at or "",
            view_count=m.view_count,
            like_count=m.like_count,
            url=m.url or "",
        )
