from fastapi import APIRouter, Depends

from core.errors import AppError, ConfigError, UpstreamError, ValidationError
from models.image_edit import EditRequest, EditResponse, ErrorResponse
from services.gemini_service import GeminiService
from services.image_edit_service import ImageEditService

router = APIRouter(prefix="/edit", tags=["image-edit"])


def get_image_edit_service() -> ImageEditService:
    return ImageEditService(GeminiService())


@router.post(
    "",
    response_model=EditResponse,
    response_model_by_alias=True,
    responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def edit_image(
    edit_request: EditRequest,
    edit_service: ImageEditService = Depends(get_image_edit_service),
):
    """Edit an image with Gemini and return the result as a data URL"""
    try:
        data_url = await edit_service.edit(edit_request)
    except (ValidationError, ConfigError):
        raise
    except UpstreamError as e:
        raise AppError(f"Server error: {e.message}", 500)
    except Exception as e:
        print(f"❌ Unexpected error in edit handler: {e!r}")
        raise AppError(f"Server error: {e}", 500)

    return EditResponse(data_url=data_url)


@router.get("/health")
async def check_gemini_config():
    """Check if the Gemini credential is configured"""
    has_key = GeminiService().configured

    return {
        "configured": has_key,
        "message": "Gemini API key configured" if has_key else "GEMINI_API_KEY / API_KEYS not set"
    }
