# backoffice/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backoffice.config import settings
from backoffice.core.bootstrap import ensure_default_admin
from backoffice.core.db import close_db, init_db
from backoffice.core.errors import install_error_handlers
from backoffice.core.security import TokenService, TokenSettings
from backoffice.middleware.rate_limit import RateLimitMiddleware
from backoffice.middleware.security_headers import SecurityHeadersMiddleware

from backoffice.api.v1.routers import auth, blogs, users

logger = logging.getLogger("uvicorn.error")

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fails startup when JWT_SECRET is missing
    app.state.token_service = TokenService(TokenSettings.from_settings(settings))
    await init_db()
    # Ensure there's a default admin account on first run
    await ensure_default_admin()
    logger.info("[server] %s ready (env=%s)", settings.APP_NAME, settings.env)
    yield
    await close_db()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# Middleware runs in reverse order of registration
app.add_middleware(
    RateLimitMiddleware,
    enabled=settings.rate_limit_enabled,
    window_sec=settings.rate_limit_window_sec,
    global_limit=settings.rate_limit_global_max,
    login_limit=settings.rate_limit_login_max,
    login_path=f"{API_PREFIX}/auth/login",
    trust_proxy=settings.rate_limit_trust_proxy,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)

install_error_handlers(app)

# REST
app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(users.router, prefix=API_PREFIX)
app.include_router(blogs.router, prefix=API_PREFIX)


@app.get("/")
def root():
    return {"status": "success", "message": "API is running securely."}
