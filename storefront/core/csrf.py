import hashlib
import hmac
import logging
import secrets

from fastapi import Request, Response

from storefront.core.config import Settings
from storefront.core.errors import ApiError

logger = logging.getLogger(__name__)

CSRF_REJECTED_MESSAGE = "رمز الحماية غير صالح، يرجى تحديث الصفحة والمحاولة مرة أخرى"


def _sign(nonce: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), nonce.encode("utf-8"), hashlib.sha256).hexdigest()


def _is_signed(token: str, secret: str) -> bool:
    """
    token looks like: "<nonce>.<hex hmac of nonce>"
    """
    nonce, _, signature = token.partition(".")
    if not nonce or not signature:
        return False
    return hmac.compare_digest(_sign(nonce, secret), signature)


def issue_csrf_token(response: Response, settings: Settings) -> str:
    """
    Double submit cookie: the same token goes into a cookie the page
    script can read and must come back in the request header.
    """
    nonce = secrets.token_urlsafe(32)
    token = f"{nonce}.{_sign(nonce, settings.jwt_secret)}"
    response.set_cookie(
        settings.csrf_cookie_name,
        token,
        httponly=False,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    return token


def verify_csrf(request: Request, settings: Settings) -> None:
    cookie_token = request.cookies.get(settings.csrf_cookie_name, "")
    header_token = request.headers.get(settings.csrf_header_name, "")

    if not cookie_token or not header_token:
        logger.warning("CSRF token missing on %s %s", request.method, request.url.path)
        raise ApiError(403, CSRF_REJECTED_MESSAGE)

    if not hmac.compare_digest(cookie_token.encode("utf-8"), header_token.encode("utf-8")):
        logger.warning("CSRF token mismatch on %s %s", request.method, request.url.path)
        raise ApiError(403, CSRF_REJECTED_MESSAGE)

    if not _is_signed(header_token, settings.jwt_secret):
        logger.warning("CSRF token signature invalid on %s %s", request.method, request.url.path)
        raise ApiError(403, CSRF_REJECTED_MESSAGE)
