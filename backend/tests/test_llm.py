import io
import json
import urllib.error
import ollama
from utils import llm

PARAMS = llm.GenerationParams(temperature=0.9, top_p=0.95, max_output_tokens=1024)

def _http_error(code: int, body: dict):
    return urllib.error.HTTPError(
        "https://generativelanguage.googleapis.com", code, "error", hdrs=None,
        fp=io.BytesIO(json.dumps(body).encode("utf-8")),
    )

def test_google_success(mock_external_deps):
    result = llm.generate_text("prompt", "gemini-1.5-pro", PARAMS)

    assert result.ok
    assert result.text.startswith("1. Dreams in the night")

    req = mock_external_deps.call_args.args[0]
    payload = json.loads(req.data.decode("utf-8"))
    assert "gemini-1.5-pro:generateContent" in req.full_url
    assert payload["generationConfig"] == {"temperature": 0.9, "maxOutputTokens": 1024, "topP": 0.95}
    assert mock_external_deps.call_args.kwargs["timeout"] == 60.0

def test_google_request_omits_top_p_when_unset(mock_external_deps):
    llm.generate_text("prompt", "gemini-pro", llm.GenerationParams(temperature=0.9, max_output_tokens=1024))

    payload = json.loads(mock_external_deps.call_args.args[0].data.decode("utf-8"))
    assert "topP" not in payload["generationConfig"]

def test_google_model_not_found(mock_external_deps):
    mock_external_deps.side_effect = _http_error(404, {"error": {"message": "models/gemini-1.5-pro is not found"}})

    result = llm.generate_text("prompt", "gemini-1.5-pro", PARAMS)

    assert not result.ok
    assert result.failure.kind == llm.FAILURE_MODEL_NOT_FOUND

def test_google_server_error(mock_external_deps):
    mock_external_deps.side_effect = _http_error(500, {"error": {"message": "internal"}})

    result = llm.generate_text("prompt", "gemini-1.5-pro", PARAMS)

    assert result.failure.kind == llm.FAILURE_ERROR

def test_google_connection_error(mock_external_deps):
    mock_external_deps.side_effect = urllib.error.URLError("no route")

    result = llm.generate_text("prompt", "gemini-1.5-pro", PARAMS)

    assert result.failure.kind == llm.FAILURE_ERROR

def test_google_blocked_response_is_empty(mock_external_deps):
    mock_external_deps.return_value.read.return_value = json.dumps(
        {"candidates": [{"finishReason": "SAFETY"}]}
    ).encode("utf-8")

    result = llm.generate_text("prompt", "gemini-1.5-pro", PARAMS)

    assert result.failure.kind == llm.FAILURE_EMPTY_RESPONSE

def test_missing_api_key_skips_network(mock_external_deps, test_settings, monkeypatch):
    monkeypatch.setattr(test_settings, "GEMINI_API_KEY", None)

    result = llm.generate_text("prompt", "gemini-1.5-pro", PARAMS)

    assert not result.ok
    assert mock_external_deps.call_count == 0

def test_missing_credential_per_provider(test_settings, monkeypatch):
    assert llm.get_missing_credential() is None

    monkeypatch.setattr(test_settings, "GEMINI_API_KEY", "")
    assert llm.get_missing_credential() == "GEMINI_API_KEY"
    assert not llm.is_provider_configured()

    monkeypatch.setattr(test_settings, "LLM_PROVIDER", "ollama")
    assert llm.get_missing_credential() is None

def test_ollama_success(mocker, test_settings, monkeypatch):
    monkeypatch.setattr(test_settings, "LLM_PROVIDER", "ollama")
    mock_client = mocker.patch("ollama.Client")
    mock_client.return_value.generate.return_value = {"response": "  local bars  "}

    result = llm.generate_text("prompt", "llama3.2", PARAMS)

    assert result.ok
    assert result.text == "local bars"
    kwargs = mock_client.return_value.generate.call_args.kwargs
    assert kwargs["model"] == "llama3.2"
    assert kwargs["options"]["top_p"] == 0.95
    assert kwargs["options"]["num_predict"] == 1024

def test_ollama_model_not_found(mocker, test_settings, monkeypatch):
    monkeypatch.setattr(test_settings, "LLM_PROVIDER", "ollama")
    mock_client = mocker.patch("ollama.Client")
    mock_client.return_value.generate.side_effect = ollama.ResponseError("model 'llama9' not found", 404)

    result = llm.generate_text("prompt", "llama9", PARAMS)

    assert result.failure.kind == llm.FAILURE_MODEL_NOT_FOUND

def test_parse_google_response():
    data = {"candidates": [{"content": {"parts": [{"text": "  bars \n"}]}}]}
    assert llm.parse_google_response(data) == "bars"
    assert llm.parse_google_response({"candidates": []}) == ""
    assert llm.parse_google_response({}) == ""

def test_check_llm_status_google(test_settings, monkeypatch):
    assert "Configured" in llm.check_llm_status()

    monkeypatch.setattr(test_settings, "GEMINI_API_KEY", None)
    assert "Missing" in llm.check_llm_status()

def test_check_llm_status_ollama(mocker, test_settings, monkeypatch):
    monkeypatch.setattr(test_settings, "LLM_PROVIDER", "ollama")
    monkeypatch.setattr(test_settings, "LLM_MODEL", "llama3.2")
    mock_client = mocker.patch("ollama.Client")
    mock_client.return_value.list.return_value = {"models": [{"name": "llama3.2:latest"}]}

    status = llm.check_llm_status()

    assert status.startswith("Ollama Connected")
    assert "Warning" not in status
