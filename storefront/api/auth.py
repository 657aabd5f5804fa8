import logging

from fastapi import APIRouter, Depends, Response

from storefront.api.deps import csrf_protect, get_settings
from storefront.core.config import Settings
from storefront.core.csrf import issue_csrf_token
from storefront.core.errors import ApiError
from storefront.core.security import check_admin_credentials, create_session_token
from storefront.schemas.auth import CsrfTokenOut, LoginIn
from storefront.schemas.orders import MessageOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])

LOGIN_OK_MESSAGE = "تم تسجيل الدخول بنجاح"
LOGIN_FAILED_MESSAGE = "اسم المستخدم أو كلمة المرور غير صحيحة"
LOGOUT_MESSAGE = "تم تسجيل الخروج بنجاح"


@router.get("/csrf-token", response_model=CsrfTokenOut)
def csrf_token(response: Response, settings: Settings = Depends(get_settings)):
    return CsrfTokenOut(csrfToken=issue_csrf_token(response, settings))


@router.post("/admin/login", response_model=MessageOut, dependencies=[Depends(csrf_protect)])
def login(payload: LoginIn, response: Response, settings: Settings = Depends(get_settings)):
    if not check_admin_credentials(payload.username, payload.password, settings):
        logger.warning("Failed admin login for username %r", payload.username)
        raise ApiError(401, LOGIN_FAILED_MESSAGE)

    token = create_session_token(payload.username, settings)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.jwt_access_ttl_min * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    logger.info("Admin %r logged in", payload.username)
    return MessageOut(success=True, message=LOGIN_OK_MESSAGE)


@router.post("/admin/logout", response_model=MessageOut)
def logout(response: Response, settings: Settings = Depends(get_settings)):
    response.delete_cookie(settings.session_cookie_name)
    return MessageOut(success=True, message=LOGOUT_MESSAGE)
