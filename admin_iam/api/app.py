from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from admin_iam.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from admin_iam.app.services.credential_verifier import CredentialVerifier
from admin_iam.app.services.token_service import TokenService
from admin_iam.app.use_cases.admins import SeedAdminUseCase
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"] if part != "body"),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    logger.warning(f"Validation error: {details}")
    return JSONResponse(
        status_code=422,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Validation errors",
                "details": details,
            }
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
    )


async def seed_admin(app: FastAPI, ApplicationConfig):
    async with app.state.session_factory() as session:
        use_case = SeedAdminUseCase(
            SqlAlchemyUnitOfWork(session), app.state.credential_verifier
        )
        result = await use_case.execute(
            name=ApplicationConfig.SEED_ADMIN_NAME,
            email=ApplicationConfig.SEED_ADMIN_EMAIL,
            password=ApplicationConfig.SEED_ADMIN_PASSWORD,
            phone=ApplicationConfig.SEED_ADMIN_PHONE,
        )
    if result.is_err():
        logger.error(f"Admin seeding skipped: {result.error.message}")


def create_app(ApplicationConfig) -> FastAPI:
    # Raises MissingSigningKey before anything else is built
    token_service = TokenService.from_config(ApplicationConfig)

    engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        if ApplicationConfig.SEED_ADMIN:
            await seed_admin(app, ApplicationConfig)
        yield
        await engine.dispose()

    app = FastAPI(title="Admin IAM API", version="0.1.0", lifespan=lifespan)

    app.state.engine = engine
    app.state.session_factory = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    app.state.token_service = token_service
    app.state.credential_verifier = CredentialVerifier(ApplicationConfig.BCRYPT_ROUNDS)
    app.state.cookie_secure = ApplicationConfig.COOKIE_SECURE

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from admin_iam.api.routes import admins, auth, health_check

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(admins.router, tags=["Admins"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
