from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": False, "error": error}),
    )


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    if exc.base_error.details:
        error_dict["details"] = exc.base_error.details
    error_dict.update(exc.extra)
    logger.warning(f"Client error on {request.method} {request.url.path}: {error_dict['code']}")
    return _error_response(exc.status_code, error_dict)


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(
        f"Server error on {request.method} {request.url.path}: "
        f"{exc.base_error.code} - {exc.base_error.message}"
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, error_dict)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        location = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        details.append(
            {
                "field": ".".join(location) or "body",
                "message": err.get("msg", "Invalid value"),
                "value": err.get("input"),
            }
        )
    logger.warning(f"Validation failed on {request.method} {request.url.path}: {len(details)} error(s)")
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        {"code": "VALIDATION_FAILED", "message": "Validation failed", "details": details},
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {"code": "INTERNAL_ERROR", "message": "Internal server error"},
    )


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Church Management API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import (
        audit,
        auth,
        campaigns,
        churches,
        donations,
        expenses,
        financial_records,
        health_check,
        members,
        notifications,
        subscriptions,
        volunteer_teams,
    )

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(subscriptions.router, prefix=prefix, tags=["Subscriptions"])
    app.include_router(churches.router, prefix=prefix, tags=["Churches"])
    app.include_router(members.router, prefix=prefix, tags=["Members"])
    app.include_router(volunteer_teams.router, prefix=prefix, tags=["Volunteer Teams"])
    app.include_router(campaigns.router, prefix=prefix, tags=["Campaigns"])
    app.include_router(donations.router, prefix=prefix, tags=["Donations"])
    app.include_router(expenses.router, prefix=prefix, tags=["Expenses"])
    app.include_router(financial_records.router, prefix=prefix, tags=["Financial Records"])
    app.include_router(notifications.router, prefix=prefix, tags=["Notifications"])
    app.include_router(audit.router, prefix=prefix, tags=["Audit"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
