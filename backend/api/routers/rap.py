from fastapi import APIRouter, Body, Depends, Query
from sqlmodel import Session
from typing import Any, List, Optional
from infra.database.connection import get_session
from domain.models.user import User
from domain.constants import SEARCH_MIN_QUERY_LENGTH
from api.dependencies import get_current_user, require_user
from api.schemas.common import CountResponse, MessageResponse
from api.schemas.rap import (
    RapGenerateRequest,
    RapGenerateResponse,
    RapCreate,
    RapUpdate,
    RapRead,
    LikeRead,
    LikeResponse,
)
from app.services.generation_app_service import GenerationAppService
from app.services.rap_app_service import RapAppService

router = APIRouter()

# Static paths are declared before /api/rap/{rap_id}

@router.post(
    "/api/rap/generate",
    response_model=RapGenerateResponse,
    openapi_extra={"requestBody": {"content": {"application/json": {"schema": RapGenerateRequest.model_json_schema(by_alias=True)}}}},
)
def generate_rap(
    body: Any = Body(None),
    user: Optional[User] = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    Generate lyrics without saving them. The body is validated before the
    session is checked, so a malformed request is a 400 even when signed out.
    """
    user_id = user.id if user else None
    # The pooled connection is returned before the provider call, which may block for LLM_TIMEOUT_SECONDS
    session.close()

    service = GenerationAppService()
    return service.generate(body, user_id)

@router.post("/api/rap", response_model=RapRead, status_code=201)
def create_rap(data: RapCreate, user: User = Depends(require_user), session: Session = Depends(get_session)):
    service = RapAppService(session)
    return service.create_rap(user.id, data)

@router.get("/api/rap/user", response_model=List[RapRead])
def get_user_raps(user: User = Depends(require_user), session: Session = Depends(get_session)):
    service = RapAppService(session)
    return service.get_user_raps(user.id)

@router.get("/api/rap/user/likes", response_model=List[LikeRead])
def get_user_likes(user: User = Depends(require_user), session: Session = Depends(get_session)):
    service = RapAppService(session)
    return service.get_user_likes(user.id)

@router.get("/api/rap/public", response_model=List[RapRead])
def get_public_raps(session: Session = Depends(get_session)):
    service = RapAppService(session)
    return service.get_public_raps()

@router.get("/api/rap/search", response_model=List[RapRead])
def search_raps(
    q: str = Query(..., min_length=SEARCH_MIN_QUERY_LENGTH, description="Substring matched against topic and content"),
    session: Session = Depends(get_session)
):
    service = RapAppService(session)
    return service.search_raps(q)

@router.get("/api/rap/{rap_id}", response_model=RapRead)
def get_rap(rap_id: int, user: Optional[User] = Depends(get_current_user), session: Session = Depends(get_session)):
    service = RapAppService(session)
    return service.get_rap(rap_id, user.id if user else None)

@router.put("/api/rap/{rap_id}", response_model=RapRead)
def update_rap(rap_id: int, data: RapUpdate, user: User = Depends(require_user), session: Session = Depends(get_session)):
    service = RapAppService(session)
    return service.update_rap(rap_id, user.id, data)

@router.delete("/api/rap/{rap_id}", response_model=MessageResponse)
def delete_rap(rap_id: int, user: User = Depends(require_user), session: Session = Depends(get_session)):
    service = RapAppService(session)
    service.delete_rap(rap_id, user.id)
    return {"message": "Rap deleted successfully"}

@router.post("/api/rap/{rap_id}/like", response_model=LikeResponse)
def like_rap(rap_id: int, user: User = Depends(require_user), session: Session = Depends(get_session)):
    service = RapAppService(session)
    return service.like_rap(rap_id, user.id)

@router.delete("/api/rap/{rap_id}/like", response_model=CountResponse)
def unlike_rap(rap_id: int, user: User = Depends(require_user), session: Session = Depends(get_session)):
    service = RapAppService(session)
    return service.unlike_rap(rap_id, user.id)

@router.get("/api/rap/{rap_id}/likes", response_model=CountResponse)
def get_rap_likes(rap_id: int, session: Session = Depends(get_session)):
    service = RapAppService(session)
    return service.get_like_count(rap_id)
