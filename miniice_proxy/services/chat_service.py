from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional
import logging

from miniice_proxy.core import config
from miniice_proxy.providers.base import GenerateFn
from miniice_proxy.schemas.chat import Turn
from miniice_proxy.services.limiter import ProcessLimiter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationOutcome:
    response: str
    model: str
    timestamp: datetime


async def handle_chat_request(
    *,
    message: str,
    history: Optional[List[Turn]],
    generate: GenerateFn,
    limiter: Optional[ProcessLimiter] = None,
    model: Optional[str] = None,
) -> GenerationOutcome:
    # history is only acknowledged; the process receives the new message alone
    if history:
        logger.debug("ignoring %d history turn(s)", len(history))

    if limiter is None:
        raw = await generate(message)
    else:
        async with limiter.slot():
            raw = await generate(message)

    reply = raw.strip()
    return GenerationOutcome(
        response=reply or config.APOLOGY,
        model=model or config.MINI_ICE_MODEL,
        timestamp=datetime.now(timezone.utc),
    )
