import logging

from fastapi import FastAPI, HTTPException, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "حدث خطأ في الخادم، يرجى المحاولة لاحقاً"
INVALID_REQUEST_MESSAGE = "بيانات الطلب غير صالحة"


class ApiError(HTTPException):
    """HTTP error whose detail is safe to show to the client."""

    def __init__(self, status_code: int, message: str, headers: dict[str, str] | None = None):
        super().__init__(status_code=status_code, detail=message, headers=headers)


class SessionError(ApiError):
    """401 for API routes; the handler also clears the session cookie."""

    def __init__(self, message: str = "يجب تسجيل الدخول أولاً"):
        super().__init__(401, message)


class LoginRequired(Exception):
    """Page routes redirect to the login page instead of answering 401."""


class PersistenceUnavailable(Exception):
    """No document store is configured."""


def _error_body(message: str) -> dict:
    return {"success": False, "message": message}


def register_exception_handlers(app: FastAPI) -> None:
    cookie_name = app.state.settings.session_cookie_name

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        response = JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )
        if isinstance(exc, SessionError):
            response.delete_cookie(cookie_name)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content=_error_body(INVALID_REQUEST_MESSAGE))

    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        response = RedirectResponse("/login.html", status_code=302)
        response.delete_cookie(cookie_name)
        return response

    @app.exception_handler(PersistenceUnavailable)
    async def persistence_handler(request: Request, exc: PersistenceUnavailable):
        logger.error("Write to %s failed: document store is not configured", request.url.path)
        return JSONResponse(status_code=500, content=_error_body(GENERIC_ERROR_MESSAGE))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=_error_body(GENERIC_ERROR_MESSAGE))
