from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Depends, Header, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, load_settings
from .db import build_session_factory, create_db_engine, init_db
from .errors import (
    AccountServiceError,
    AuthenticationError,
    ConflictError,
    StorageError,
    ValidationError,
)
from .hashing import PasswordHasher
from .routes import dev_monitor
from .routes.deps import get_account_service, get_settings
from .schemas import (
    AuthResponse,
    DatabaseCheckResponse,
    LoginRequest,
    RegisterRequest,
    StatusResponse,
    UsernameAvailability,
    VerifyTokenResponse,
)
from .service import AccountService
from .store import CredentialStore
from .tokens import TokenIssuer
from .utils.event_logger import configure_logging, log_account_event

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    ConflictError: status.HTTP_409_CONFLICT,
}


def build_account_service(settings: Settings) -> AccountService:
    """Wire the store, hasher and token issuer from settings."""
    engine = create_db_engine(settings.DATABASE_URL, settings.DB_TIMEOUT_SECONDS)
    init_db(engine)
    store = CredentialStore(build_session_factory(engine))
    hasher = PasswordHasher(rounds=settings.PASSWORD_HASH_ROUNDS)
    tokens = TokenIssuer(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expire_days=settings.TOKEN_EXPIRE_DAYS,
    )
    return AccountService(store, hasher, tokens)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Settings are resolved at startup; a missing JWT_SECRET aborts startup
    with ConfigurationError.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        resolved = settings or load_settings()
        configure_logging(resolved.LOG_LEVEL, resolved.LOG_DIR)
        app.state.settings = resolved
        app.state.account_service = build_account_service(resolved)
        logger.info("Account service started: environment=%s", resolved.ENVIRONMENT)
        yield

    app = FastAPI(
        title="Account Service",
        description="Account registration, login and bearer token verification",
        version=API_VERSION,
        lifespan=lifespan
    )

    cors_origins = settings.CORS_ORIGINS if settings else Settings.model_fields["CORS_ORIGINS"].default
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(dev_monitor.router)

    @app.exception_handler(AccountServiceError)
    async def account_error_handler(request: Request, exc: AccountServiceError):
        for error_type, status_code in ERROR_STATUS.items():
            if isinstance(exc, error_type):
                return JSONResponse(status_code=status_code, content={"error": exc.message})

        logger.error("Server error on %s %s: %s", request.method, request.url.path, exc)
        content = {"error": "server error"}
        if isinstance(exc, StorageError) and get_settings(request).is_development:
            content["detail"] = exc.message
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)

    @app.get("/api/status", response_model=StatusResponse)
    def api_status():
        return StatusResponse(status="online", version=API_VERSION)

    @app.get("/api/test-db", response_model=DatabaseCheckResponse)
    def check_db(service: AccountService = Depends(get_account_service)):
        return DatabaseCheckResponse(success=True, time=service.store.ping())

    @app.post("/api/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
    def register(payload: RegisterRequest, request: Request, service: AccountService = Depends(get_account_service)):
        try:
            result = service.register(payload.username, payload.email, payload.password)
        except ConflictError:
            log_account_event("register_conflict", request, username=payload.username)
            raise
        log_account_event("register_success", request, username=result.account.username, account_id=result.account.id)
        return AuthResponse(message="Registration successful", token=result.token, user=result.account)

    @app.post("/api/login", response_model=AuthResponse)
    def login(credentials: LoginRequest, request: Request, service: AccountService = Depends(get_account_service)):
        try:
            result = service.login(credentials.username, credentials.password)
        except AuthenticationError:
            log_account_event("login_failure", request, username=credentials.username)
            raise
        log_account_event("login_success", request, username=result.account.username, account_id=result.account.id)
        return AuthResponse(message="Login successful", token=result.token, user=result.account)

    @app.get("/api/verify-token", response_model=VerifyTokenResponse)
    def verify_token(
        request: Request,
        authorization: Optional[str] = Header(default=None, alias="Authorization"),
        service: AccountService = Depends(get_account_service),
    ):
        token = None
        if authorization and authorization.lower().startswith("bearer "):
            token = authorization.split(" ", 1)[1].strip()

        session = service.verify_session(token)
        if not session.valid:
            log_account_event("token_invalid", request)
            return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"valid": False})
        return VerifyTokenResponse(valid=True, user=session.payload)

    @app.get("/api/check-username/{username}", response_model=UsernameAvailability)
    def check_username(username: str, service: AccountService = Depends(get_account_service)):
        return UsernameAvailability(username=username, available=service.check_username_available(username))

    return app


app = create_app()
