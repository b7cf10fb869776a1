"""Argument models for MCP tools."""
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SendNotificationArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: Annotated[str, Field(default=None, validate_default=True)]
    title: Optional[str] = None
    sound: Optional[str] = None
    session: Optional[str] = None
    window: Optional[str] = None
    pane: Optional[str] = None
    use_current: bool = Field(default=False, alias="useCurrent")

    @field_validator("message", mode="before")
    @classmethod
    def validate_message(cls, v: Any) -> str:
        if v is None or v is False or not str(v).strip():
            raise ValueError("Message is required")
        return str(v)

    @field_validator("title", "sound", "session", "window", "pane", mode="before")
    @classmethod
    def coerce_optional_text(cls, v: Any) -> Optional[str]:
        if v is None or v == "" or v is False:
            return None
        return str(v)
