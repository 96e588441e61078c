"""Pydantic schemas for the webhook payload.

This module defines the message document posted to the Discord-compatible
webhook. Field names match the receiving service's wire format.
IMPORTANT: Embed.timestamp is a datetime object, serialized to an ISO-8601 string.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Dict, List, Optional


class EmbedField(BaseModel):
    """A single named field of an embed."""

    name: str = Field(..., min_length=1, max_length=256, description="Field heading")
    value: str = Field(..., min_length=1, max_length=1024, description="Field body")
    inline: bool = Field(default=False, description="Render side by side with neighbouring inline fields")

    class Config:
        frozen = True


class EmbedFooter(BaseModel):
    """Footer line of an embed."""

    text: str = Field(..., description="Footer text")
    icon_url: Optional[str] = Field(None, description="Optional footer icon")

    class Config:
        frozen = True


class EmbedThumbnail(BaseModel):
    """Thumbnail image of an embed."""

    url: str = Field(..., description="Image URL")

    class Config:
        frozen = True


class Embed(BaseModel):
    """Rich-content block carried by the webhook message."""

    title: str = Field(..., max_length=256, description="Embed title")
    description: str = Field(..., description="Embed description")

    # Discord colors are 24-bit RGB integers
    color: int = Field(..., ge=0, le=0xFFFFFF, description="Accent color as an integer")

    thumbnail: Optional[EmbedThumbnail] = Field(None, description="Optional thumbnail")
    fields: List[EmbedField] = Field(default_factory=list, description="Ordered embed fields")
    footer: EmbedFooter = Field(..., description="Footer")

    # CRITICAL: aware datetime, dumped as ISO-8601 in JSON mode
    timestamp: datetime = Field(..., description="Instant the reminder was composed")

    class Config:
        frozen = True


class WebhookMessage(BaseModel):
    """Top-level webhook message.

    Immutable once composed; the dispatcher only reads it.
    """

    username: Optional[str] = Field(None, description="Display name override")
    avatar_url: Optional[str] = Field(None, description="Avatar image override")
    embeds: List[Embed] = Field(..., min_length=1, description="Embedded rich-content blocks")

    class Config:
        frozen = True

        json_schema_extra = {
            "example": {
                "username": "薬リマインダーBot",
                "avatar_url": "https://cdn-icons-png.flaticon.com/512/2966/2966327.png",
                "embeds": [{
                    "title": "💊 薬の服薬確認",
                    "description": "おはようございます！\n今日の薬はちゃんと飲みましたか？",
                    "color": 16766720,
                    "fields": [{"name": "📅 日時", "value": "日曜日 2026/10/18 07:30", "inline": True}],
                    "footer": {"text": "健康管理リマインダー"},
                    "timestamp": "2026-10-17T22:30:00Z"
                }]
            }
        }

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-ready request body, omitting unset optional keys."""
        return self.model_dump(mode="json", exclude_none=True)
