import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from miniice_proxy.schemas.chat import ChatRequest, ChatResponse, ErrorResponse
from miniice_proxy.api.deps import get_generate, get_limiter
from miniice_proxy.providers.base import GenerateFn, ProviderError, ProviderTimeout
from miniice_proxy.services.chat_service import handle_chat_request
from miniice_proxy.services.limiter import CapacityExceeded, ProcessLimiter

router = APIRouter(prefix="/api", tags=["chat"])
logger = logging.getLogger(__name__)


def _preview(text: str, limit: int = 100) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


@router.post(
    "/mini-ice",
    response_model=ChatResponse,
    responses={500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def mini_ice(
    req: ChatRequest,
    generate: GenerateFn = Depends(get_generate),
    limiter: ProcessLimiter = Depends(get_limiter),
):
    logger.info("processing: %r", _preview(req.message))

    try:
        outcome = await handle_chat_request(
            message=req.message,
            history=req.conversation_history,
            generate=generate,
            limiter=limiter,
        )
    except CapacityExceeded as e:
        logger.warning("rejected, at capacity: %s", e)
        body = ErrorResponse(error="Service busy", message=str(e))
        return JSONResponse(status_code=503, content=body.model_dump())
    except ProviderError as e:
        if isinstance(e, ProviderTimeout):
            logger.warning("generation timed out: %s", e)
        else:
            logger.error("generation failed: %s", e)
        body = ErrorResponse(error="Internal server error", message=str(e))
        return JSONResponse(status_code=500, content=body.model_dump())

    logger.info("response: %r", _preview(outcome.response))
    return ChatResponse(response=outcome.response, model=outcome.model, timestamp=outcome.timestamp)
