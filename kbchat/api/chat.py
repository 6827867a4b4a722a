"""Chat API endpoint."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from kbchat.chains.answer_question import answer_question
from kbchat.core.access_gate import get_app_settings
from kbchat.core.config import Settings
from kbchat.core.logging import get_logger
from kbchat.core.schemas_chat import ChatRequest

logger = get_logger(__name__)

router = APIRouter()


@router.post("/chat")
async def chat(
    request: ChatRequest,
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """
    Answer a question from the knowledge cards.

    Public deployments get ``{answer}``; internal ones also get
    ``confidence`` and ``debug.cards``. Backend failures return a fixed
    apology with status 500.
    """
    question = request.question.strip()
    if not question:
        return JSONResponse(content={"error": "Question is required."}, status_code=400)

    outcome = await answer_question(question, settings)
    return JSONResponse(content=outcome.response.model_dump(), status_code=outcome.status_code)
