from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from storefront.api.deps import get_settings, require_admin_page
from storefront.core.config import Settings
from storefront.core.csrf import issue_csrf_token
from storefront.core.errors import ApiError

router = APIRouter(tags=["pages"])


def _page(settings: Settings, name: str) -> FileResponse:
    path = Path(settings.public_dir) / name
    if not path.is_file():
        raise ApiError(404, "الصفحة غير موجودة")
    return FileResponse(path, media_type="text/html")


@router.get("/", include_in_schema=False)
def index(settings: Settings = Depends(get_settings)):
    return _page(settings, "index.html")


@router.get("/login.html", include_in_schema=False)
def login_page(settings: Settings = Depends(get_settings)):
    response = _page(settings, "login.html")
    issue_csrf_token(response, settings)
    return response


@router.get("/dashboard.html", include_in_schema=False, dependencies=[Depends(require_admin_page)])
def dashboard_page(settings: Settings = Depends(get_settings)):
    response = _page(settings, "dashboard.html")
    issue_csrf_token(response, settings)
    return response
