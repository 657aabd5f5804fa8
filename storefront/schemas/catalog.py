from pydantic import BaseModel, ConfigDict, Field


class SubscriptionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    base_price: float = Field(alias="basePrice")
    duration: str | None


class PlanOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    name: str
    duration: str
    price: float
