import logging

from fastapi import Depends, File, Request, UploadFile

from storefront.core.config import Settings
from storefront.core.csrf import verify_csrf
from storefront.core.errors import ApiError, LoginRequired, SessionError
from storefront.core.security import AdminSession, InvalidSession, decode_session_token
from storefront.db.store import DocumentStore
from storefront.integrations.telegram import Notifier
from storefront.models.catalog import Catalog
from storefront.services.uploads import TOO_MANY_FILES_MESSAGE, has_file, save_screenshot

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> DocumentStore | None:
    return request.app.state.store


def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog


def get_notifier(request: Request) -> Notifier | None:
    return request.app.state.notifier


# ---------------------------
# CSRF gate
# ---------------------------

def csrf_protect(request: Request, settings: Settings = Depends(get_settings)) -> None:
    verify_csrf(request, settings)


def public_form_csrf_protect(request: Request, settings: Settings = Depends(get_settings)) -> None:
    if settings.csrf_protect_public_forms:
        verify_csrf(request, settings)


# ---------------------------
# Admin session
# ---------------------------

def _session_from_cookie(request: Request, settings: Settings) -> AdminSession:
    token = request.cookies.get(settings.session_cookie_name)
    return decode_session_token(token, settings)


def require_admin(request: Request, settings: Settings = Depends(get_settings)) -> AdminSession:
    """API routes answer 401 (and clear the cookie) without a valid session."""
    try:
        return _session_from_cookie(request, settings)
    except InvalidSession as exc:
        logger.info("Rejected admin API call to %s: %s", request.url.path, exc)
        raise SessionError()


def require_admin_write(
    request: Request,
    _csrf: None = Depends(csrf_protect),
    settings: Settings = Depends(get_settings),
) -> AdminSession:
    # CSRF is checked first, then the session
    return require_admin(request, settings)


def require_admin_page(request: Request, settings: Settings = Depends(get_settings)) -> AdminSession:
    """Page routes redirect to /login.html without a valid session."""
    try:
        return _session_from_cookie(request, settings)
    except InvalidSession:
        raise LoginRequired()


# ---------------------------
# Uploads
# ---------------------------

def screenshot_upload(
    transfer_screenshots: list[UploadFile] | None = File(None, alias="transferScreenshot"),
    settings: Settings = Depends(get_settings),
) -> str | None:
    """
    Runs before the order handler: rejects non-images, oversized files and
    more than one file, and returns the stored file name (None when nothing
    was attached).
    """
    attached = [upload for upload in transfer_screenshots or [] if has_file(upload)]
    if not attached:
        return None
    if len(attached) > 1:
        logger.info("Rejected order with %d screenshot parts", len(attached))
        raise ApiError(400, TOO_MANY_FILES_MESSAGE)
    return save_screenshot(attached[0], settings.upload_dir, settings.max_upload_bytes)
