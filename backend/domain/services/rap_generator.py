import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from config import settings
from domain.constants import (
    DEFAULT_LINE_COUNT,
    MAX_WORDS_PER_LINE,
    RHYME_SCHEMES,
    EXPLICIT_ALLOWED,
    EXPLICIT_MODERATED,
    PRIMARY_TEMPERATURE,
    PRIMARY_TOP_P,
    FALLBACK_TEMPERATURE,
    MAX_OUTPUT_TOKENS,
    SAMPLE_RAP,
)
from domain.exceptions import GenerationPreconditionError
from utils import llm
from utils.logger import get_logger

logger = get_logger(__name__)


class GenerationSource(str, Enum):
    PRIMARY = "primary"
    FALLBACK_MODEL = "fallback_model"
    LOCAL_SAMPLE = "local_sample"


@dataclass
class RapRequest:
    topic: str
    genre: str
    stanza_count: Optional[int] = None
    explicit: bool = False


@dataclass
class GenerationAttempt:
    source: GenerationSource
    model: str
    params: llm.GenerationParams
    # Only run when the previous attempt failed with this kind
    only_after: Optional[str] = None


@dataclass
class GenerationOutcome:
    text: str
    source: GenerationSource
    model: Optional[str] = None


def build_prompt(topic: str, genre: str, line_count: int, rhyme_scheme: str, explicit: bool) -> str:
    explicit_option = EXPLICIT_ALLOWED if explicit else EXPLICIT_MODERATED
    return (
        f'You are a professional rap lyricist. Create a rap with {line_count} lines about "{topic}" in {genre} style.\n'
        f"Rules:\n"
        f"- Use rhyme scheme: {rhyme_scheme}\n"
        f"- {explicit_option}\n"
        f"- Keep each line to a maximum of {MAX_WORDS_PER_LINE} words\n"
        f"- Format as numbered stanzas\n"
        f"- Make it creative and original"
    )


def generate_sample_rap(topic: str, genre: str, explicit: bool) -> str:
    """Canned lyric used when every provider attempt failed. Ignores its inputs."""
    return SAMPLE_RAP


class RapGenerator:
    """
    Turns a rap request into lyric text.

    Provider calls run through an ordered attempt list: the primary model,
    then the fallback model if (and only if) the primary model was not found.
    Anything else ends in the local sample, so `generate` always returns text.
    """

    def __init__(
        self,
        model: Optional[str] = None,
        fallback_model: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ):
        self.model = model or settings.LLM_MODEL
        self.fallback_model = fallback_model or settings.LLM_FALLBACK_MODEL
        self.rng = rng or random.Random()

    def build_attempts(self) -> List[GenerationAttempt]:
        attempts = [
            GenerationAttempt(
                source=GenerationSource.PRIMARY,
                model=self.model,
                params=llm.GenerationParams(
                    temperature=PRIMARY_TEMPERATURE,
                    top_p=PRIMARY_TOP_P,
                    max_output_tokens=MAX_OUTPUT_TOKENS,
                ),
            ),
        ]
        if self.fallback_model and self.fallback_model != self.model:
            attempts.append(GenerationAttempt(
                source=GenerationSource.FALLBACK_MODEL,
                model=self.fallback_model,
                params=llm.GenerationParams(
                    temperature=FALLBACK_TEMPERATURE,
                    max_output_tokens=MAX_OUTPUT_TOKENS,
                ),
                only_after=llm.FAILURE_MODEL_NOT_FOUND,
            ))
        return attempts

    def choose_rhyme_scheme(self) -> str:
        return self.rng.choice(RHYME_SCHEMES)

    def generate(self, request: RapRequest) -> GenerationOutcome:
        if not request.topic or not request.topic.strip() or not request.genre or not request.genre.strip():
            raise GenerationPreconditionError("Topic and genre are required for generating rap lyrics")

        line_count = request.stanza_count or DEFAULT_LINE_COUNT
        prompt = build_prompt(
            request.topic,
            request.genre,
            line_count,
            self.choose_rhyme_scheme(),
            request.explicit,
        )

        last_failure: Optional[llm.ProviderFailure] = None
        for attempt in self.build_attempts():
            if attempt.only_after is not None:
                if last_failure is None or last_failure.kind != attempt.only_after:
                    continue
                logger.info(f"Trying with alternative model: {attempt.model}...")

            result = self._run_attempt(prompt, attempt)
            if result.ok:
                logger.info(f"Successfully generated rap lyrics ({attempt.source.value}, {attempt.model})")
                return GenerationOutcome(text=result.text, source=attempt.source, model=attempt.model)

            logger.warning(f"Attempt {attempt.source.value} ({attempt.model}) failed: {result.failure.kind}")
            last_failure = result.failure

        logger.info("Using fallback rap generation")
        return GenerationOutcome(
            text=generate_sample_rap(request.topic, request.genre, request.explicit),
            source=GenerationSource.LOCAL_SAMPLE,
        )

    def _run_attempt(self, prompt: str, attempt: GenerationAttempt) -> llm.ProviderResult:
        try:
            result = llm.generate_text(prompt, attempt.model, attempt.params)
        except Exception as e:
            logger.exception(f"Unexpected provider error ({attempt.model}): {e}")
            return llm.ProviderResult.failed(llm.FAILURE_ERROR, str(e))

        if result.ok and not result.text.strip():
            return llm.ProviderResult.failed(llm.FAILURE_EMPTY_RESPONSE, "empty response")
        return result
