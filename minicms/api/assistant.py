"""AI-assisted draft generation endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from minicms.api.dependencies import get_content_assistant, get_current_user, verify_csrf
from minicms.schemas.post import GenerateRequest, GenerateResponse
from minicms.services.assistant import ContentAssistant
from minicms.services.sessions import CurrentUser

router = APIRouter(prefix="/api/v1/assistant", tags=["assistant"])


@router.post("/generate", response_model=GenerateResponse, dependencies=[Depends(verify_csrf)])
async def generate_content(
    request_data: GenerateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    assistant: Annotated[ContentAssistant, Depends(get_content_assistant)],
):
    """Generate draft post text from a title.

    Upstream failures come back as 500 with the failure message.
    """
    title = request_data.title.strip()
    if not title:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Title is required"
        )
    return GenerateResponse(content=await assistant.generate(title))
