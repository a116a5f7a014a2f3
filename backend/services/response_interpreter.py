from typing import Any, Dict, Union

from core.errors import UpstreamAbnormalStopError, UpstreamBlockedError, UpstreamNoImageError
from models.gemini import (
    AbnormalStopOutcome,
    BlockedOutcome,
    GenerateContentResponse,
    ImageOutcome,
    ModelOutcome,
    NoImageOutcome,
)


def interpret_response(response: Union[GenerateContentResponse, Dict[str, Any]]) -> ModelOutcome:
    """
    Reduce a generateContent reply to exactly one outcome.

    Priority: safety block, inline image, abnormal finish, then no image.
    """
    if not isinstance(response, GenerateContentResponse):
        response = GenerateContentResponse.model_validate(response)

    feedback = response.prompt_feedback
    if feedback and feedback.block_reason:
        return BlockedOutcome(reason=feedback.block_reason, message=feedback.block_reason_message)

    candidate = response.first_candidate
    if candidate and candidate.content:
        for part in candidate.content.parts:
            if part.inline_data and part.inline_data.data:
                return ImageOutcome(mime_type=part.inline_data.mime_type, data=part.inline_data.data)

    if candidate and candidate.finish_reason and candidate.finish_reason != "STOP":
        return AbnormalStopOutcome(finish_reason=candidate.finish_reason)

    text = (response.text or "").strip()
    return NoImageOutcome(text=text or None)


def outcome_to_data_url(outcome: ModelOutcome) -> str:
    """Return the image data URL, or raise the error matching the outcome."""
    if isinstance(outcome, ImageOutcome):
        return outcome.data_url
    if isinstance(outcome, BlockedOutcome):
        raise UpstreamBlockedError(outcome.reason, outcome.message)
    if isinstance(outcome, AbnormalStopOutcome):
        raise UpstreamAbnormalStopError(outcome.finish_reason)
    raise UpstreamNoImageError(outcome.text)
