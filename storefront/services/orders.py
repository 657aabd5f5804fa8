from typing import Any

from storefront.core.config import Settings
from storefront.core.errors import ApiError
from storefront.models.catalog import Catalog
from storefront.schemas.orders import OrderIn
from storefront.utils.dt import to_iso, utc_now

ORDER_TYPE = "customer_order"

UNKNOWN_SUBSCRIPTION_MESSAGE = "الاشتراك المطلوب غير موجود"
UNKNOWN_PLAN_MESSAGE = "الباقة المطلوبة غير موجودة"
MISSING_FIELDS_MESSAGE = "يرجى ملء جميع الحقول المطلوبة"
SCREENSHOT_REQUIRED_MESSAGE = "يرجى إرفاق صورة التحويل"
ORDER_ACCEPTED_MESSAGE = "تم استلام طلبك بنجاح وسيتم مراجعته قريباً"

REQUIRED_FIELDS = ("account_name", "email", "phone", "transfer_number")


def build_order(
    form: OrderIn,
    catalog: Catalog,
    settings: Settings,
    screenshot: str | None,
) -> dict[str, Any]:
    """
    Validate a submitted order against the catalog and build the record
    to persist. Catalog values are authoritative for price and duration.
    Raises ApiError(400); the caller owns cleanup of `screenshot`.
    """
    # 1) Subscription
    subscription = catalog.get_subscription(form.subscription_id)
    if subscription is None:
        raise ApiError(400, UNKNOWN_SUBSCRIPTION_MESSAGE)

    # 2) Plan (optional; the base price applies without one)
    plan = None
    if settings.plans_enabled and form.plan_key:
        plan = catalog.find_plan(subscription.id, form.plan_key)
        if plan is None:
            raise ApiError(400, UNKNOWN_PLAN_MESSAGE)

    if any(not getattr(form, field) for field in REQUIRED_FIELDS):
        raise ApiError(400, MISSING_FIELDS_MESSAGE)

    # 3) Screenshot
    if settings.screenshot_required and not screenshot:
        raise ApiError(400, SCREENSHOT_REQUIRED_MESSAGE)

    # 4) Effective price + duration
    order: dict[str, Any] = {
        "subscriptionId": subscription.id,
        "subscriptionName": subscription.name,
    }
    if plan is not None:
        order.update({
            "planKey": plan.key,
            "planName": plan.name,
            "planDuration": plan.duration,
            "planPrice": plan.price,
        })
    else:
        order.update({
            "subscriptionPrice": subscription.base_price,
            "duration": subscription.duration,
        })

    # 5) Record
    order.update({
        "accountName": form.account_name,
        "email": form.email,
        "phone": form.phone,
        "transferNumber": form.transfer_number,
        "transferScreenshot": screenshot,
        "createdAt": to_iso(utc_now()),
        "status": "pending",
        "type": ORDER_TYPE,
    })
    return order
