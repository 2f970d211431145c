from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
from contextlib import asynccontextmanager
from infra.database import connection as db_connection
from api.errors import register_exception_handlers
from api.routers import (
    auth,
    genres,
    rap,
    system,
)

from config import settings

# Lifespan event to handle startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    db_connection.init_db()  # tables, sequences and default genres
    yield
    db_connection.close_db()

app = FastAPI(title="Rapmania Backend API", lifespan=lifespan)

# CORS Configuration
origins = [
    f"http://localhost:{settings.FRONTEND_PORT}",    # Vite Dev Server
    f"http://127.0.0.1:{settings.FRONTEND_PORT}",
    f"http://localhost:{settings.RAPMANIA_PORT}",
    f"http://127.0.0.1:{settings.RAPMANIA_PORT}",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Signed cookie sessions
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    session_cookie="rapmania_session",
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
    https_only=settings.SESSION_HTTPS_ONLY,
)

register_exception_handlers(app)

# Root endpoint for health check
@app.get("/")
async def root():
    return {"message": "Rapmania Backend API is running"}

# Include Routers
app.include_router(auth.router)
app.include_router(genres.router)
app.include_router(rap.router)
app.include_router(system.router)
