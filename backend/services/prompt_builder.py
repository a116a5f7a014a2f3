"""Instruction templates sent to the image model for each edit mode.

The safety text below is policy handed to the model; nothing here filters
content locally.
"""
from typing import Optional, Union

from core.errors import ValidationError
from models.image_edit import EditMode, Hotspot

SKIN_TONE_POLICY = (
    "- You MUST fulfill requests to adjust skin tone, such as 'give me a tan', "
    "'make my skin darker', or 'make my skin lighter'. These are considered standard photo enhancements.\n"
    "- You MUST REFUSE any request to change a person's fundamental race or ethnicity "
    "(e.g., 'make me look Asian', 'change this person to be Black'). Do not perform these edits. "
    "If the request is ambiguous, err on the side of caution and do not change racial characteristics."
)

FILTER_POLICY = (
    "- Filters may subtly shift colors, but you MUST ensure they do not alter a person's "
    "fundamental race or ethnicity.\n"
    "- You MUST REFUSE any request that explicitly asks to change a person's race "
    "(e.g., 'apply a filter to make me look Chinese')."
)


def _edit_prompt(user_prompt: str, hotspot: Hotspot) -> str:
    return (
        "You are an expert photo editor AI. Your task is to perform a natural, localized edit "
        "on the provided image based on the user's request.\n"
        f'User Request: "{user_prompt}"\n'
        f"Edit Location: Focus on the area around pixel coordinates (x: {hotspot.x}, y: {hotspot.y}).\n"
        "Editing Guidelines:\n"
        "- The edit must be realistic and blend seamlessly with the surrounding area.\n"
        "- The rest of the image (outside the immediate edit area) must remain identical to the original.\n"
        "Safety & Ethics Policy:\n"
        f"{SKIN_TONE_POLICY}\n"
        "Output: Return ONLY the final edited image. Do not return text."
    )


def _filter_prompt(user_prompt: str) -> str:
    return (
        "You are an expert photo editor AI. Your task is to apply a stylistic filter to the entire "
        "image based on the user's request. Do not change the composition or content, only apply the style.\n"
        f'Filter Request: "{user_prompt}"\n'
        "Safety & Ethics Policy:\n"
        f"{FILTER_POLICY}\n"
        "Output: Return ONLY the final filtered image. Do not return text."
    )


def _adjust_prompt(user_prompt: str) -> str:
    return (
        "You are an expert photo editor AI. Your task is to perform a natural, global adjustment "
        "to the entire image based on the user's request.\n"
        f'User Request: "{user_prompt}"\n'
        "Editing Guidelines:\n"
        "- The adjustment must be applied across the entire image.\n"
        "- The result must be photorealistic.\n"
        "Safety & Ethics Policy:\n"
        f"{SKIN_TONE_POLICY}\n"
        "Output: Return ONLY the final adjusted image. Do not return text."
    )


def parse_mode(mode: Union[EditMode, str]) -> EditMode:
    try:
        return EditMode(mode)
    except ValueError:
        raise ValidationError(f"Invalid mode: {mode!r}. Expected one of: edit, filter, adjust.")


def build_prompt(
    mode: Union[EditMode, str],
    user_prompt: str,
    hotspot: Optional[Hotspot] = None,
) -> str:
    """
    Build the model instruction for one edit request.

    Args:
        mode: edit, filter or adjust
        user_prompt: the user's free-text request, embedded verbatim
        hotspot: focus point, required for edit and ignored otherwise

    Returns:
        The instruction string

    Raises:
        ValidationError: unknown mode, empty prompt, or edit without hotspot
    """
    edit_mode = parse_mode(mode)
    if not user_prompt:
        raise ValidationError("Prompt must not be empty.")

    if edit_mode == EditMode.EDIT:
        if hotspot is None:
            raise ValidationError("Missing hotspot for edit mode.")
        return _edit_prompt(user_prompt, hotspot)
    if edit_mode == EditMode.FILTER:
        return _filter_prompt(user_prompt)
    return _adjust_prompt(user_prompt)
