from fastapi import APIRouter, Depends, Request
from sqlmodel import Session
from infra.database.connection import get_session
from domain.models.user import User
from api.dependencies import login_session, logout_session, require_user
from api.schemas.auth import SignUpRequest, SignInRequest, GoogleAuthRequest, UserRead
from api.schemas.common import MessageResponse
from app.services.auth_app_service import AuthAppService

router = APIRouter()

@router.post("/api/auth/signup", response_model=UserRead, status_code=201)
def sign_up(data: SignUpRequest, request: Request, session: Session = Depends(get_session)):
    service = AuthAppService(session)
    user = service.sign_up(data)
    login_session(request, user)
    return user

@router.post("/api/auth/signin", response_model=UserRead)
def sign_in(data: SignInRequest, request: Request, session: Session = Depends(get_session)):
    service = AuthAppService(session)
    user = service.sign_in(data)
    login_session(request, user)
    return user

@router.post("/api/auth/google", response_model=UserRead)
def google_sign_in(data: GoogleAuthRequest, request: Request, session: Session = Depends(get_session)):
    service = AuthAppService(session)
    user = service.resolve_or_create_google_user(data)
    login_session(request, user)
    return user

@router.post("/api/auth/signout", response_model=MessageResponse)
def sign_out(request: Request):
    logout_session(request)
    return {"message": "Signed out successfully"}

@router.get("/api/auth/me", response_model=UserRead)
def get_me(user: User = Depends(require_user)):
    return user
