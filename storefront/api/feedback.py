from fastapi import APIRouter, BackgroundTasks, Depends

from storefront.api.deps import (
    get_notifier,
    get_settings,
    get_store,
    public_form_csrf_protect,
    require_admin,
    require_admin_write,
)
from storefront.core.config import Settings
from storefront.db.store import INQUIRIES, SUGGESTIONS, DocumentStore
from storefront.integrations.telegram import (
    Notifier,
    format_inquiry_message,
    format_suggestion_message,
    notify_safely,
)
from storefront.schemas.feedback import InquiryCreatedOut, InquiryIn, SuggestionCreatedOut, SuggestionIn
from storefront.schemas.orders import MessageOut, StatusUpdateIn
from storefront.services.feedback import (
    INQUIRY_ACCEPTED_MESSAGE,
    SUGGESTION_ACCEPTED_MESSAGE,
    build_inquiry,
    build_suggestion,
)
from storefront.services.records import INQUIRY_STATUSES, create_record, delete_record, list_records, update_status

suggestions_router = APIRouter(prefix="/api", tags=["suggestions"])
inquiries_router = APIRouter(prefix="/api", tags=["inquiries"])

DELETED_MESSAGE = "تم الحذف بنجاح"
INQUIRY_UPDATED_MESSAGE = "تم تحديث حالة الاستفسار بنجاح"


# ---------------------------
# suggestions
# ---------------------------

@suggestions_router.post(
    "/suggestion",
    response_model=SuggestionCreatedOut,
    dependencies=[Depends(public_form_csrf_protect)],
)
def submit_suggestion(
    payload: SuggestionIn,
    background_tasks: BackgroundTasks,
    store: DocumentStore | None = Depends(get_store),
    notifier: Notifier | None = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
):
    suggestion = build_suggestion(payload, settings)
    suggestion_id = create_record(store, SUGGESTIONS, suggestion)

    background_tasks.add_task(notify_safely, notifier, format_suggestion_message(suggestion, suggestion_id))
    return SuggestionCreatedOut(message=SUGGESTION_ACCEPTED_MESSAGE, suggestionId=suggestion_id)


@suggestions_router.get("/suggestions", dependencies=[Depends(require_admin)])
def list_suggestions(store: DocumentStore | None = Depends(get_store)):
    return list_records(store, SUGGESTIONS)


@suggestions_router.delete(
    "/suggestions/{suggestion_id}",
    response_model=MessageOut,
    dependencies=[Depends(require_admin_write)],
)
def delete_suggestion(suggestion_id: str, store: DocumentStore | None = Depends(get_store)):
    delete_record(store, SUGGESTIONS, suggestion_id)
    return MessageOut(success=True, message=DELETED_MESSAGE)


# ---------------------------
# inquiries
# ---------------------------

@inquiries_router.post(
    "/inquiry",
    response_model=InquiryCreatedOut,
    dependencies=[Depends(public_form_csrf_protect)],
)
def submit_inquiry(
    payload: InquiryIn,
    background_tasks: BackgroundTasks,
    store: DocumentStore | None = Depends(get_store),
    notifier: Notifier | None = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
):
    inquiry = build_inquiry(payload, settings)
    inquiry_id = create_record(store, INQUIRIES, inquiry)

    background_tasks.add_task(notify_safely, notifier, format_inquiry_message(inquiry, inquiry_id))
    return InquiryCreatedOut(message=INQUIRY_ACCEPTED_MESSAGE, inquiryId=inquiry_id)


@inquiries_router.get("/inquiries", dependencies=[Depends(require_admin)])
def list_inquiries(store: DocumentStore | None = Depends(get_store)):
    return list_records(store, INQUIRIES)


@inquiries_router.put(
    "/inquiries/{inquiry_id}",
    response_model=MessageOut,
    dependencies=[Depends(require_admin_write)],
)
def update_inquiry_status(
    inquiry_id: str,
    payload: StatusUpdateIn,
    store: DocumentStore | None = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    update_status(
        store,
        INQUIRIES,
        inquiry_id,
        payload.status,
        INQUIRY_STATUSES,
        allow_any_transition=settings.allow_any_status_transition,
    )
    return MessageOut(success=True, message=INQUIRY_UPDATED_MESSAGE)


@inquiries_router.delete(
    "/inquiries/{inquiry_id}",
    response_model=MessageOut,
    dependencies=[Depends(require_admin_write)],
)
def delete_inquiry(inquiry_id: str, store: DocumentStore | None = Depends(get_store)):
    delete_record(store, INQUIRIES, inquiry_id)
    return MessageOut(success=True, message=DELETED_MESSAGE)
