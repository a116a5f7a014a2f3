"""Typed view of the Gemini generateContent reply and the outcomes we derive from it."""
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class InlineData(_CamelModel):
    mime_type: str = Field("image/png", alias="mimeType")
    data: str = ""


class Part(_CamelModel):
    text: Optional[str] = None
    inline_data: Optional[InlineData] = Field(None, alias="inlineData")


class Content(_CamelModel):
    parts: List[Part] = []
    role: Optional[str] = None


class Candidate(_CamelModel):
    content: Optional[Content] = None
    finish_reason: Optional[str] = Field(None, alias="finishReason")


class PromptFeedback(_CamelModel):
    block_reason: Optional[str] = Field(None, alias="blockReason")
    block_reason_message: Optional[str] = Field(None, alias="blockReasonMessage")


class GenerateContentResponse(_CamelModel):
    candidates: List[Candidate] = []
    prompt_feedback: Optional[PromptFeedback] = Field(None, alias="promptFeedback")

    @property
    def first_candidate(self) -> Optional[Candidate]:
        return self.candidates[0] if self.candidates else None

    @property
    def text(self) -> Optional[str]:
        """Concatenated text parts of the first candidate, or None."""
        candidate = self.first_candidate
        if not candidate or not candidate.content:
            return None
        texts = [part.text for part in candidate.content.parts if part.text]
        return "".join(texts) if texts else None


class BlockedOutcome(BaseModel):
    kind: Literal["blocked"] = "blocked"
    reason: str
    message: Optional[str] = None


class ImageOutcome(BaseModel):
    kind: Literal["image"] = "image"
    mime_type: str
    data: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


class AbnormalStopOutcome(BaseModel):
    kind: Literal["abnormal_stop"] = "abnormal_stop"
    finish_reason: str


class NoImageOutcome(BaseModel):
    kind: Literal["no_image"] = "no_image"
    text: Optional[str] = None


ModelOutcome = Annotated[
    Union[BlockedOutcome, ImageOutcome, AbnormalStopOutcome, NoImageOutcome],
    Field(discriminator="kind"),
]
