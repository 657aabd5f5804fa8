from fastapi import APIRouter, Depends

from storefront.api.deps import get_catalog, get_settings
from storefront.core.config import Settings
from storefront.core.errors import ApiError
from storefront.models.catalog import Catalog
from storefront.schemas.catalog import PlanOut, SubscriptionOut
from storefront.services.orders import UNKNOWN_SUBSCRIPTION_MESSAGE

router = APIRouter(prefix="/api", tags=["catalog"])


# Display available subscriptions
@router.get("/subscriptions", response_model=list[SubscriptionOut])
def list_subscriptions(catalog: Catalog = Depends(get_catalog)):
    return list(catalog.subscriptions)


# Plans of one subscription; the id may arrive as "1" or "01"
@router.get("/plans/{subscription_id}", response_model=list[PlanOut])
def list_plans(
    subscription_id: str,
    catalog: Catalog = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
):
    if catalog.get_subscription(subscription_id) is None:
        raise ApiError(404, UNKNOWN_SUBSCRIPTION_MESSAGE)
    if not settings.plans_enabled:
        return []
    return list(catalog.plans_for(subscription_id))
