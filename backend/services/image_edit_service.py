from typing import Optional

from models.image_edit import EditRequest
from services.gemini_service import GeminiService
from services.prompt_builder import build_prompt
from services.response_interpreter import interpret_response, outcome_to_data_url


class ImageEditService:
    """Builds the instruction, calls the model and turns its reply into a data URL."""

    def __init__(self, gemini_service: Optional[GeminiService] = None):
        self.gemini = gemini_service or GeminiService()

    async def edit(self, request: EditRequest) -> str:
        instruction = build_prompt(request.mode, request.prompt, request.hotspot)
        print(f"🎨 Sending {request.mode.value} request to {self.gemini.model}")

        response = await self.gemini.generate_content(request.image, request.mime_type, instruction)
        outcome = interpret_response(response)
        if outcome.kind != "image":
            print(f"⚠️ Model returned no image ({outcome.kind})")
        return outcome_to_data_url(outcome)
