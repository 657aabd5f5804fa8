from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Durations are stored with the labels the storefront shows
MONTHLY = "شهري"
YEARLY = "سنوي"

DURATION_ALIASES = {
    "monthly": MONTHLY,
    "month": MONTHLY,
    "yearly": YEARLY,
    "annual": YEARLY,
    "year": YEARLY,
}


def normalize_duration(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return DURATION_ALIASES.get(cleaned.lower(), cleaned)


class SubscriptionEntry(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    base_price: float = Field(alias="basePrice")
    duration: str | None = None

    @field_validator("duration")
    @classmethod
    def _normalize_duration(cls, v: str | None) -> str | None:
        return normalize_duration(v)


class PlanEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    duration: str
    price: float

    @field_validator("duration")
    @classmethod
    def _known_duration(cls, v: str) -> str:
        v = normalize_duration(v)
        if v not in (MONTHLY, YEARLY):
            raise ValueError(f"unknown plan duration: {v}")
        return v


class Catalog(BaseModel):
    """
    Static subscription + plan table, loaded once at start-up.
    Plans are grouped by subscription id (JSON object keys are strings).
    """
    model_config = ConfigDict(frozen=True)

    subscriptions: tuple[SubscriptionEntry, ...]
    plans: dict[str, tuple[PlanEntry, ...]] = Field(default_factory=dict)

    def get_subscription(self, subscription_id: int | str | None) -> SubscriptionEntry | None:
        key = _id_key(subscription_id)
        if key is None:
            return None
        for sub in self.subscriptions:
            if str(sub.id) == key:
                return sub
        return None

    def plans_for(self, subscription_id: int | str | None) -> tuple[PlanEntry, ...]:
        key = _id_key(subscription_id)
        if key is None:
            return ()
        return self.plans.get(key, ())

    def find_plan(self, subscription_id: int | str | None, plan_key: str | None) -> PlanEntry | None:
        if not plan_key:
            return None
        for plan in self.plans_for(subscription_id):
            if plan.key == plan_key:
                return plan
        return None


def _id_key(subscription_id: int | str | None) -> str | None:
    # "1", " 1 " and 1 all address subscription 1
    if subscription_id is None or isinstance(subscription_id, bool):
        return None
    key = str(subscription_id).strip()
    if not key:
        return None
    try:
        return str(int(key))
    except ValueError:
        return key


def load_catalog(path: str | Path) -> Catalog:
    return Catalog.model_validate_json(Path(path).read_text(encoding="utf-8"))
