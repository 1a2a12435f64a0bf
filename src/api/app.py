from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    body = exc.to_body()
    logger.warning(f"Client error: {body['error']}")
    return JSONResponse(status_code=exc.status_code, content=body)


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=exc.to_body()
    )


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.ENABLE_SCHEDULER:
            from src.tasks import start_scheduler, stop_scheduler

            await start_scheduler()
            yield
            await stop_scheduler()
        else:
            yield

    app = FastAPI(title="HR Onboarding API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import (
        approvals,
        audit,
        compliance,
        documents,
        employees,
        health_check,
        invitation,
        onboarding,
    )

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(invitation.router, tags=["Invitations"])
    app.include_router(onboarding.router, tags=["Onboarding"])
    app.include_router(employees.router, tags=["Employees"])
    app.include_router(approvals.router, tags=["Approvals"])
    app.include_router(documents.router, tags=["Documents"])
    app.include_router(compliance.router, tags=["Compliance"])
    app.include_router(audit.router, tags=["Audit"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
