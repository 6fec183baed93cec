from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, StrictStr

from miniice_proxy.core import config


class Turn(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    message: StrictStr = Field(min_length=1, max_length=config.MESSAGE_MAX_CHARS or None)
    # accepted for client compatibility; never forwarded to the generation process
    conversation_history: List[Turn] = Field(default_factory=list)


class ChatResponse(BaseModel):
    response: str
    model: str
    timestamp: datetime


class HealthResponse(BaseModel):
    status: str
    model: str
    service: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    error: str
    message: str
