from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EditMode(str, Enum):
    EDIT = "edit"
    FILTER = "filter"
    ADJUST = "adjust"


class Hotspot(BaseModel):
    """Pixel coordinates marking the focus point of a localized edit."""
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)


class EditRequest(BaseModel):
    """Wire envelope for POST /api/edit."""

    model_config = ConfigDict(populate_by_name=True)

    image: str = Field(..., min_length=1, description="Base64 payload without the data: header")
    mime_type: str = Field(..., alias="mimeType", min_length=1)
    prompt: str = Field(..., min_length=1)
    mode: EditMode
    hotspot: Optional[Hotspot] = None

    @model_validator(mode="after")
    def check_hotspot(self):
        if self.mode == EditMode.EDIT and self.hotspot is None:
            raise ValueError("hotspot is required for edit mode")
        if self.mode != EditMode.EDIT and self.hotspot is not None:
            raise ValueError(f"hotspot is only allowed for edit mode, not {self.mode.value}")
        return self

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EditResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data_url: str = Field(..., alias="dataUrl")


class ErrorResponse(BaseModel):
    error: str


class EditResult(BaseModel):
    """Outcome of one client submission: a data URL or a typed failure."""
    success: bool
    data_url: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @model_validator(mode="after")
    def check_exclusive(self):
        if self.success and (not self.data_url or self.error is not None):
            raise ValueError("successful result must carry only a data_url")
        if not self.success and (self.data_url is not None or not self.error):
            raise ValueError("failed result must carry only an error")
        return self
