from typing import Any

from storefront.core.config import Settings
from storefront.core.errors import ApiError
from storefront.schemas.feedback import InquiryIn, SuggestionIn
from storefront.utils.dt import to_iso, utc_now

MISSING_FIELDS_MESSAGE = "يرجى ملء جميع الحقول المطلوبة"
SUGGESTION_ACCEPTED_MESSAGE = "شكراً لك! تم إرسال اقتراحك بنجاح"
INQUIRY_ACCEPTED_MESSAGE = "تم إرسال استفسارك بنجاح وسنرد عليك قريباً"


def _contact_fields(values: dict[str, str | None], settings: Settings) -> dict[str, str]:
    """
    Either every contact field is mandatory, or blanks fall back to the
    configured placeholder, depending on require_contact_fields.
    """
    out = {}
    for field, value in values.items():
        if value:
            out[field] = value
        elif settings.require_contact_fields:
            raise ApiError(400, MISSING_FIELDS_MESSAGE)
        else:
            out[field] = settings.unspecified_placeholder
    return out


def build_suggestion(form: SuggestionIn, settings: Settings) -> dict[str, Any]:
    if not form.message:
        raise ApiError(400, MISSING_FIELDS_MESSAGE)

    return {
        **_contact_fields({"name": form.name, "contact": form.contact}, settings),
        "message": form.message,
        "createdAt": to_iso(utc_now()),
    }


def build_inquiry(form: InquiryIn, settings: Settings) -> dict[str, Any]:
    if not form.message:
        raise ApiError(400, MISSING_FIELDS_MESSAGE)

    return {
        **_contact_fields({"name": form.name, "email": form.email}, settings),
        "subject": form.subject or None,
        "message": form.message,
        "createdAt": to_iso(utc_now()),
        "status": "pending",
    }
