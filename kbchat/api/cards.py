"""Knowledge card ingestion endpoint."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from kbchat.chains.create_card import CardValidationError, create_card
from kbchat.core.access_gate import get_app_settings
from kbchat.core.config import Settings
from kbchat.core.logging import get_logger
from kbchat.core.schemas_cards import CreateCardRequest, CreateCardResponse, ErrorResponse
from kbchat.core.upstream import UpstreamError

logger = get_logger(__name__)

router = APIRouter()


@router.post("/cards/create", response_model=CreateCardResponse)
async def create_card_endpoint(
    request: CreateCardRequest,
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """
    Embed and store a new knowledge card.

    Returns:
        200 ``{ok, id}``, 400 ``{error}`` on missing fields, 500 ``{error}``
        with the upstream message when embedding or insertion fails
    """
    try:
        card_id = await create_card(request, settings)
    except CardValidationError as e:
        return JSONResponse(content=ErrorResponse(error=str(e)).model_dump(), status_code=400)
    except UpstreamError as e:
        logger.error(f"Card creation failed in {e.service}: {e.message}")
        return JSONResponse(content=ErrorResponse(error=e.message).model_dump(), status_code=500)

    return JSONResponse(content=CreateCardResponse(id=card_id).model_dump())
