"""
Menu assistant route.
"""

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from ..deps import get_assistant_service
from ...schemas.assistant import AssistantRequest, AssistantResponse
from ...services.assistant_service import AssistantService

router = APIRouter()


@router.post("/recommend", response_model=AssistantResponse)
async def recommend(
    req: AssistantRequest,
    assistant: AssistantService = Depends(get_assistant_service),
):
    reply = await run_in_threadpool(assistant.answer, req.message)
    return AssistantResponse(reply=reply)
