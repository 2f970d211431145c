import json
import urllib.request
import urllib.error
from dataclasses import dataclass
from typing import Optional, Dict, Any
from config import settings
import ollama
from utils.logger import get_logger

logger = get_logger(__name__)

# Providers
PROVIDER_GOOGLE = "google"
PROVIDER_OLLAMA = "ollama"

# Failure kinds
FAILURE_MODEL_NOT_FOUND = "model_not_found"
FAILURE_EMPTY_RESPONSE = "empty_response"
FAILURE_ERROR = "error"

GOOGLE_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


@dataclass
class GenerationParams:
    temperature: float
    max_output_tokens: int
    top_p: Optional[float] = None


@dataclass
class ProviderFailure:
    kind: str
    message: str


@dataclass
class ProviderResult:
    text: str = ""
    failure: Optional[ProviderFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, text: str) -> "ProviderResult":
        return cls(text=text)

    @classmethod
    def failed(cls, kind: str, message: str) -> "ProviderResult":
        return cls(failure=ProviderFailure(kind=kind, message=message))


def get_provider() -> str:
    return (settings.LLM_PROVIDER or PROVIDER_GOOGLE).lower()

def get_missing_credential() -> Optional[str]:
    """
    Name of the setting that must be configured before generation can run,
    or None when the provider is ready to be called.
    """
    provider = get_provider()
    if provider == PROVIDER_OLLAMA:
        return None if settings.OLLAMA_HOST else "OLLAMA_HOST"
    return None if settings.GEMINI_API_KEY else "GEMINI_API_KEY"

def is_provider_configured() -> bool:
    return get_missing_credential() is None

def _is_model_not_found(message: str) -> bool:
    msg = message.lower()
    return "models/" in msg and "not found" in msg

def _call_google(api_key: str, model: str, prompt: str, params: GenerationParams) -> ProviderResult:
    url = f"{GOOGLE_API_BASE}/{model}:generateContent?key={api_key}"
    headers = {"Content-Type": "application/json"}

    generation_config: Dict[str, Any] = {
        "temperature": params.temperature,
        "maxOutputTokens": params.max_output_tokens,
    }
    if params.top_p is not None:
        generation_config["topP"] = params.top_p

    data = {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": generation_config,
    }
    return _execute_request(url, headers, data, parse_google_response, label=f"google/{model}")

def _call_ollama(host: str, model: str, prompt: str, params: GenerationParams) -> ProviderResult:
    options: Dict[str, Any] = {
        "temperature": params.temperature,
        "num_predict": params.max_output_tokens,
    }
    if params.top_p is not None:
        options["top_p"] = params.top_p

    try:
        client = ollama.Client(host=host, timeout=settings.LLM_TIMEOUT_SECONDS)
        response = client.generate(model=model, prompt=prompt, options=options)
    except ollama.ResponseError as e:
        logger.error(f"Ollama Error ({host}, {model}): {e}")
        if e.status_code == 404 or "not found" in str(e).lower():
            return ProviderResult.failed(FAILURE_MODEL_NOT_FOUND, str(e))
        return ProviderResult.failed(FAILURE_ERROR, str(e))
    except Exception as e:
        logger.error(f"Ollama Connection Error ({host}): {e}")
        return ProviderResult.failed(FAILURE_ERROR, str(e))

    text = (response['response'] or "").strip() if response else ""
    if not text:
        logger.warning(f"Empty response from Ollama ({model})")
        return ProviderResult.failed(FAILURE_EMPTY_RESPONSE, "empty response")
    return ProviderResult.success(text)

def _execute_request(url: str, headers: Dict[str, str], data: Dict[str, Any], parser_func, label: str) -> ProviderResult:
    # The URL may carry the API key, so only `label` is logged.
    try:
        req = urllib.request.Request(
            url,
            data=json.dumps(data).encode('utf-8'),
            headers=headers
        )
        with urllib.request.urlopen(req, timeout=settings.LLM_TIMEOUT_SECONDS) as response:
            response_body = response.read().decode('utf-8')
            result = json.loads(response_body) if response_body else None
            parsed_text = parser_func(result) if result else ""

            if not parsed_text:
                logger.warning(f"Empty response parsed from {label}. Raw body: {response_body}")
                return ProviderResult.failed(FAILURE_EMPTY_RESPONSE, "empty response")

            return ProviderResult.success(parsed_text)

    except urllib.error.HTTPError as e:
        error_body = e.read().decode('utf-8', errors='replace')
        logger.error(f"LLM API HTTP Error ({label}): Status {e.code}\nBody: {error_body}")
        if e.code == 404 or _is_model_not_found(error_body):
            return ProviderResult.failed(FAILURE_MODEL_NOT_FOUND, f"{e.code}: {error_body}")
        return ProviderResult.failed(FAILURE_ERROR, f"{e.code}: {error_body}")

    except Exception as e:
        logger.error(f"LLM API Connection Error ({label}): {e}")
        return ProviderResult.failed(FAILURE_ERROR, str(e))

# --- Response Parsers ---
def parse_google_response(data):
    try:
        if 'candidates' in data and data['candidates']:
            candidate = data['candidates'][0]
            if 'content' in candidate and 'parts' in candidate['content']:
                return candidate['content']['parts'][0]['text'].strip()
            elif 'finishReason' in candidate:
                logger.warning(f"Gemini blocked response. Finish Reason: {candidate['finishReason']}")
                return ""

        logger.error(f"Gemini Parse Error: No content in candidates. Data: {json.dumps(data)}")
        return ""
    except (KeyError, IndexError, TypeError) as e:
        logger.error(f"Gemini Parse Exception: {e}, Data: {data}")
        return ""

# --- Main Public API ---

def generate_text(prompt: str, model: str, params: GenerationParams) -> ProviderResult:
    """
    Run one provider call. Failures come back as ProviderResult values,
    never as exceptions.
    """
    provider = get_provider()
    logger.info(f"Generating text with {provider} ({model})")

    missing = get_missing_credential()
    if missing:
        logger.error(f"{missing} is not set for provider {provider}")
        return ProviderResult.failed(FAILURE_ERROR, f"{missing} is not set")

    if provider == PROVIDER_OLLAMA:
        return _call_ollama(settings.OLLAMA_HOST, model, prompt, params)
    return _call_google(settings.GEMINI_API_KEY, model, prompt, params)

def check_llm_status() -> str:
    provider = get_provider()
    model_name = settings.LLM_MODEL

    if provider == PROVIDER_OLLAMA:
        ollama_host = settings.OLLAMA_HOST
        try:
            client = ollama.Client(host=ollama_host, timeout=settings.LLM_TIMEOUT_SECONDS)
            models_response = client.list()

            # Newer clients return an object, older ones a dict
            model_list = []
            if hasattr(models_response, 'models'):
                model_list = models_response.models
            elif isinstance(models_response, dict):
                model_list = models_response.get('models', [])

            model_names = []
            for m in model_list:
                if hasattr(m, 'model'):
                    model_names.append(m.model)
                elif isinstance(m, dict):
                    model_names.append(m.get('name') or m.get('model'))

            base_model = model_name.split(':')[0]
            found = any(base_model in m for m in model_names if m)

            status_msg = f"Ollama Connected ({model_name} at {ollama_host})"
            if not found:
                status_msg += f" - Warning: Model '{model_name}' not found."
            return status_msg
        except Exception as e:
            return f"Ollama Connection Failed: {str(e)}"
    else:
        if not settings.GEMINI_API_KEY:
            return f"{provider.capitalize()} API Key Missing"
        return f"{provider.capitalize()} Configured (Model: {model_name})"
