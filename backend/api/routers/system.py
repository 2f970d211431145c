from fastapi import APIRouter
import duckdb
from config import settings
from utils.llm import check_llm_status, get_provider, is_provider_configured

router = APIRouter()

@router.get("/api/")
def health_check():
    return {
        "status": "ok",
        "duckdb_version": duckdb.__version__,
        "llm_provider": get_provider(),
        "llm_model": settings.LLM_MODEL,
        "llm_configured": is_provider_configured(),
        "llm_status": check_llm_status(),
    }
