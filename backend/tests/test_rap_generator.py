import random
import urllib.error
import pytest
from domain.constants import SAMPLE_RAP, RHYME_SCHEMES
from domain.exceptions import GenerationPreconditionError
from domain.services.rap_generator import (
    RapGenerator,
    RapRequest,
    GenerationSource,
    build_prompt,
)
from utils import llm

def _request(**overrides):
    data = {"topic": "dreams", "genre": "Hip-Hop", "stanza_count": 8, "explicit": False}
    data.update(overrides)
    return RapRequest(**data)

def test_build_prompt_contents():
    prompt = build_prompt("dreams", "Trap", 12, "ABAB", explicit=False)
    assert "12 lines" in prompt
    assert '"dreams"' in prompt
    assert "Trap style" in prompt
    assert "rhyme scheme: ABAB" in prompt
    assert "maximum of 12 words" in prompt
    assert "numbered stanzas" in prompt
    assert "PG-13" in prompt

def test_build_prompt_explicit_policy():
    prompt = build_prompt("dreams", "Drill", 8, "AABB", explicit=True)
    assert "explicit language" in prompt
    assert "PG-13" not in prompt

def test_rhyme_scheme_is_one_of_the_labels():
    generator = RapGenerator(rng=random.Random(42))
    seen = {generator.choose_rhyme_scheme() for _ in range(50)}
    assert seen <= set(RHYME_SCHEMES)
    assert len(seen) == 2

def test_primary_success(mocker):
    mock_gen = mocker.patch("utils.llm.generate_text", return_value=llm.ProviderResult.success("Fresh bars"))

    outcome = RapGenerator().generate(_request())

    assert outcome.text == "Fresh bars"
    assert outcome.source == GenerationSource.PRIMARY
    assert mock_gen.call_count == 1
    prompt, model, params = mock_gen.call_args.args
    assert model == "gemini-1.5-pro"
    assert params.temperature == 0.9
    assert params.top_p == 0.95
    assert params.max_output_tokens == 1024
    assert "8 lines" in prompt

def test_default_line_count_when_stanza_count_unset(mocker):
    mock_gen = mocker.patch("utils.llm.generate_text", return_value=llm.ProviderResult.success("Bars"))

    RapGenerator().generate(_request(stanza_count=None))

    prompt = mock_gen.call_args.args[0]
    assert "8 lines" in prompt

def test_model_not_found_uses_fallback_model(mocker):
    mock_gen = mocker.patch("utils.llm.generate_text", side_effect=[
        llm.ProviderResult.failed(llm.FAILURE_MODEL_NOT_FOUND, "models/gemini-1.5-pro is not found"),
        llm.ProviderResult.success("Fallback bars"),
    ])

    outcome = RapGenerator().generate(_request())

    assert outcome.text == "Fallback bars"
    assert outcome.source == GenerationSource.FALLBACK_MODEL
    assert outcome.model == "gemini-pro"
    assert mock_gen.call_count == 2
    fallback_params = mock_gen.call_args_list[1].args[2]
    assert mock_gen.call_args_list[1].args[1] == "gemini-pro"
    assert fallback_params.top_p is None

def test_fallback_model_failure_uses_local_sample(mocker):
    mocker.patch("utils.llm.generate_text", side_effect=[
        llm.ProviderResult.failed(llm.FAILURE_MODEL_NOT_FOUND, "not found"),
        llm.ProviderResult.failed(llm.FAILURE_ERROR, "boom"),
    ])

    outcome = RapGenerator().generate(_request())

    assert outcome.source == GenerationSource.LOCAL_SAMPLE
    assert outcome.text == SAMPLE_RAP

def test_other_primary_error_skips_fallback_model(mocker):
    mock_gen = mocker.patch("utils.llm.generate_text", return_value=llm.ProviderResult.failed(llm.FAILURE_ERROR, "500"))

    outcome = RapGenerator().generate(_request())

    assert outcome.source == GenerationSource.LOCAL_SAMPLE
    assert mock_gen.call_count == 1

@pytest.mark.parametrize("result", [
    llm.ProviderResult.failed(llm.FAILURE_EMPTY_RESPONSE, "empty response"),
    llm.ProviderResult.success("   "),
])
def test_empty_response_uses_local_sample(mocker, result):
    mocker.patch("utils.llm.generate_text", return_value=result)

    outcome = RapGenerator().generate(_request())

    assert outcome.source == GenerationSource.LOCAL_SAMPLE
    assert outcome.text.strip()

def test_unexpected_transport_exception_is_absorbed(mocker):
    mocker.patch("utils.llm.generate_text", side_effect=RuntimeError("socket exploded"))

    outcome = RapGenerator().generate(_request())

    assert outcome.source == GenerationSource.LOCAL_SAMPLE

def test_unreachable_provider_still_returns_text(mock_external_deps):
    mock_external_deps.side_effect = urllib.error.URLError("connection refused")

    outcome = RapGenerator().generate(_request())

    assert outcome.text == SAMPLE_RAP
    assert outcome.source == GenerationSource.LOCAL_SAMPLE

@pytest.mark.parametrize("topic,genre", [
    ("", "Hip-Hop"),
    ("dreams", ""),
    ("   ", "Trap"),
    ("dreams", None),
])
def test_empty_topic_or_genre_raises_before_network(mocker, mock_external_deps, topic, genre):
    mock_gen = mocker.patch("utils.llm.generate_text")

    with pytest.raises(GenerationPreconditionError):
        RapGenerator().generate(RapRequest(topic=topic, genre=genre, stanza_count=8))

    assert mock_gen.call_count == 0
    assert mock_external_deps.call_count == 0

@pytest.mark.parametrize("stanza_count", [4, 8, 16])
@pytest.mark.parametrize("explicit", [True, False])
def test_valid_requests_always_produce_text(mock_external_deps, stanza_count, explicit):
    mock_external_deps.side_effect = TimeoutError("timed out")

    outcome = RapGenerator().generate(_request(stanza_count=stanza_count, explicit=explicit))

    assert outcome.text.strip()
