from pydantic import BaseModel, ConfigDict, Field


class OrderIn(BaseModel):
    # multipart form fields; presence is checked by the order pipeline
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    subscription_id: str | None = Field(default=None, alias="subscriptionId")
    plan_key: str | None = Field(default=None, alias="planKey")
    account_name: str | None = Field(default=None, alias="accountName")
    email: str | None = None
    phone: str | None = None
    transfer_number: str | None = Field(default=None, alias="transferNumber")


class OrderCreatedOut(BaseModel):
    success: bool = True
    message: str
    orderId: str


class StatusUpdateIn(BaseModel):
    status: str | None = None


class MessageOut(BaseModel):
    success: bool
    message: str
