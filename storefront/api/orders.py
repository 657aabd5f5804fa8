import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Form
from fastapi.responses import FileResponse

from storefront.api.deps import (
    get_catalog,
    get_notifier,
    get_settings,
    get_store,
    public_form_csrf_protect,
    require_admin,
    require_admin_write,
    screenshot_upload,
)
from storefront.core.config import Settings
from storefront.core.errors import GENERIC_ERROR_MESSAGE, ApiError
from storefront.db.store import ORDERS, DocumentStore
from storefront.integrations.telegram import Notifier, format_order_message, notify_safely
from storefront.models.catalog import Catalog
from storefront.schemas.orders import MessageOut, OrderCreatedOut, OrderIn, StatusUpdateIn
from storefront.services.orders import ORDER_ACCEPTED_MESSAGE, build_order
from storefront.services.records import ORDER_STATUSES, create_record, list_records, update_status
from storefront.services.uploads import discard_upload, image_media_type, resolve_screenshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["orders"])

STATUS_UPDATED_MESSAGE = "تم تحديث حالة الطلب بنجاح"
SCREENSHOT_NOT_FOUND_MESSAGE = "الصورة غير موجودة"


@router.post(
    "/subscription-order",
    response_model=OrderCreatedOut,
    dependencies=[Depends(public_form_csrf_protect)],
)
def submit_order(
    background_tasks: BackgroundTasks,
    subscription_id: str | None = Form(None, alias="subscriptionId"),
    plan_key: str | None = Form(None, alias="planKey"),
    account_name: str | None = Form(None, alias="accountName"),
    email: str | None = Form(None),
    phone: str | None = Form(None),
    transfer_number: str | None = Form(None, alias="transferNumber"),
    screenshot: str | None = Depends(screenshot_upload),
    store: DocumentStore | None = Depends(get_store),
    catalog: Catalog = Depends(get_catalog),
    notifier: Notifier | None = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
):
    try:
        form = OrderIn(
            subscription_id=subscription_id,
            plan_key=plan_key,
            account_name=account_name,
            email=email,
            phone=phone,
            transfer_number=transfer_number,
        )
        order = build_order(form, catalog, settings, screenshot)
        order_id = create_record(store, ORDERS, order)
    except ApiError:
        discard_upload(settings.upload_dir, screenshot)
        raise
    except Exception:
        logger.exception("Failed to store subscription order")
        discard_upload(settings.upload_dir, screenshot)
        raise ApiError(500, GENERIC_ERROR_MESSAGE)

    # Notify admin after the response is decided
    background_tasks.add_task(
        notify_safely, notifier, format_order_message(order, order_id, settings.app_base_url)
    )
    return OrderCreatedOut(message=ORDER_ACCEPTED_MESSAGE, orderId=order_id)


@router.get("/orders", dependencies=[Depends(require_admin)])
def list_orders(store: DocumentStore | None = Depends(get_store)):
    return list_records(store, ORDERS)


@router.put("/orders/{order_id}", response_model=MessageOut, dependencies=[Depends(require_admin_write)])
def update_order_status(
    order_id: str,
    payload: StatusUpdateIn,
    store: DocumentStore | None = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    update_status(
        store,
        ORDERS,
        order_id,
        payload.status,
        ORDER_STATUSES,
        allow_any_transition=settings.allow_any_status_transition,
    )
    return MessageOut(success=True, message=STATUS_UPDATED_MESSAGE)


@router.get("/screenshot/{filename}", dependencies=[Depends(require_admin)])
def get_screenshot(filename: str, settings: Settings = Depends(get_settings)):
    path = resolve_screenshot(settings.upload_dir, filename)
    if path is None:
        raise ApiError(404, SCREENSHOT_NOT_FOUND_MESSAGE)

    headers = {"X-Content-Type-Options": "nosniff"}
    media_type = image_media_type(path.name)
    if media_type is None:
        # never let the browser render anything that is not a known image
        return FileResponse(
            path,
            media_type="application/octet-stream",
            headers=headers,
            filename=path.name,
            content_disposition_type="attachment",
        )
    return FileResponse(path, media_type=media_type, headers=headers)
