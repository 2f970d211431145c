from enum import Enum
from typing import Any, Optional
import pydantic

from api.schemas.rap import RapGenerateRequest, RapGenerateResponse
from domain.exceptions import (
    AuthenticationError,
    ConfigurationError,
    GenerationError,
    GenerationPreconditionError,
    ValidationError,
)
from domain.services.rap_generator import RapGenerator, RapRequest
from utils import llm
from utils.logger import get_logger

logger = get_logger(__name__)


class GenerationState(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    GENERATING = "generating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class GenerationAppService:
    """
    Handles one rap generation request:
    received -> validated -> generating -> succeeded | failed.

    Nothing is persisted here; saving is a separate request.
    One instance per request.
    """

    def __init__(self, generator: Optional[RapGenerator] = None):
        self.generator = generator or RapGenerator()
        self.state = GenerationState.RECEIVED

    def _transition(self, state: GenerationState):
        logger.info(f"Generation request: {self.state.value} -> {state.value}")
        self.state = state

    def _fail(self, error: Exception) -> Exception:
        self._transition(GenerationState.FAILED)
        return error

    def generate(self, body: Any, user_id: Optional[int]) -> RapGenerateResponse:
        try:
            request = RapGenerateRequest.model_validate(body)
        except pydantic.ValidationError as e:
            error = ValidationError.from_pydantic(e.errors())
            logger.info(f"Validation error: {error.message}")
            raise self._fail(error)
        self._transition(GenerationState.VALIDATED)

        if user_id is None:
            raise self._fail(AuthenticationError("Unauthorized"))

        missing = llm.get_missing_credential()
        if missing:
            logger.error(f"{missing} not found in environment variables")
            raise self._fail(ConfigurationError(
                f"API key missing. Contact administrator to set up {missing}."
            ))

        self._transition(GenerationState.GENERATING)
        try:
            outcome = self.generator.generate(RapRequest(
                topic=request.topic,
                genre=request.genre,
                stanza_count=request.stanza_count,
                explicit=request.explicit,
            ))
        except GenerationPreconditionError as e:
            logger.error(f"Rap generation rejected by generator: {e}")
            raise self._fail(GenerationError())

        logger.info(f"Generated rap lyrics for user {user_id} via {outcome.source.value}")
        self._transition(GenerationState.SUCCEEDED)
        return RapGenerateResponse(content=outcome.text)
