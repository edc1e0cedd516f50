"""
Invoice draft endpoints.

Each draft lives in an in-memory editing session. Every mutating endpoint
returns the full draft with freshly recomputed totals, plus the
notification the operation produced, if any.
"""

from fastapi import APIRouter, Depends, Query, status

from invoicedesk.api.dependencies import (
    get_catalog,
    get_draft_session,
    get_registry,
    get_submit_invoice_use_case,
)
from invoicedesk.api.routes.catalog import product_to_response
from invoicedesk.application.dto.requests import (
    AddFromSearchRequest,
    BarcodePanelRequest,
    OpenDraftRequest,
    ScanBarcodeRequest,
    SelectCustomerRequest,
    SelectProductRequest,
    UpdateDraftRequest,
    UpdateItemRequest,
)
from invoicedesk.application.dto.responses import (
    DraftResponse,
    ErrorResponse,
    LineItemResponse,
    ProductListResponse,
    SubmitDraftResponse,
)
from invoicedesk.application.services import DraftRegistry, DraftSession
from invoicedesk.application.use_cases import SubmitInvoiceUseCase
from invoicedesk.core.entities.notification import Notification
from invoicedesk.core.services import CatalogIndex

router = APIRouter(prefix="/api/invoice-drafts", tags=["invoice-drafts"])


def _draft_to_response(
    session: DraftSession, notification: Notification | None = None
) -> DraftResponse:
    editor = session.editor
    draft = editor.draft
    figures = editor.totals.as_strings()
    return DraftResponse(
        id=session.id,
        customer_id=draft.customer_id,
        customer_name=draft.customer_name,
        discount=draft.discount,
        payment_type=draft.payment_type,
        currency=draft.currency,
        currency_symbol=editor.currency_symbol,
        items=[
            LineItemResponse(
                index=i,
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity,
                price=item.price,
                total=item.total,
                resolved=item.is_resolved,
            )
            for i, item in enumerate(draft.items)
        ],
        subtotal=figures["subtotal"],
        grand_total=figures["grand_total"],
        search_query=editor.search_query,
        search_results=[product_to_response(p) for p in editor.search_results],
        barcode_input=editor.barcode_input,
        barcode_panel_open=editor.barcode_panel_open,
        submitting=editor.submitting,
        notification=notification,
        created_at=session.created_at,
    )


@router.post(
    "",
    response_model=DraftResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def open_draft(
    request: OpenDraftRequest | None = None,
    registry: DraftRegistry = Depends(get_registry),
    catalog: CatalogIndex = Depends(get_catalog),
) -> DraftResponse:
    """Open a new draft with one blank row."""
    request = request or OpenDraftRequest()
    session = registry.open(
        catalog,
        currency=request.currency,
        payment_type=request.payment_type,
    )
    return _draft_to_response(session)


@router.get("/{draft_id}", response_model=DraftResponse, responses={404: {"model": ErrorResponse}})
async def get_draft(session: DraftSession = Depends(get_draft_session)) -> DraftResponse:
    """Current state of a draft."""
    return _draft_to_response(session)


@router.delete(
    "/{draft_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def cancel_draft(
    session: DraftSession = Depends(get_draft_session),
    registry: DraftRegistry = Depends(get_registry),
) -> None:
    """Discard a draft without submitting it."""
    registry.cancel(session.id)


# --- Header ---


@router.patch("/{draft_id}", response_model=DraftResponse)
async def update_draft(
    request: UpdateDraftRequest,
    session: DraftSession = Depends(get_draft_session),
) -> DraftResponse:
    """Change customer name, discount, payment type or currency."""
    editor = session.editor
    if request.customer_name is not None:
        editor.set_customer_name(request.customer_name)
    if request.discount is not None:
        editor.set_discount(request.discount)
    if request.payment_type is not None:
        editor.set_payment_type(request.payment_type)
    if request.currency is not None:
        editor.set_currency(request.currency)
    return _draft_to_response(session)


@router.put("/{draft_id}/customer", response_model=DraftResponse)
async def select_customer(
    request: SelectCustomerRequest,
    session: DraftSession = Depends(get_draft_session),
) -> DraftResponse:
    """Fill the customer from the catalog; unknown ids leave it unchanged."""
    session.editor.select_customer(request.customer_id)
    return _draft_to_response(session)


# --- Rows ---


@router.post("/{draft_id}/items", response_model=DraftResponse)
async def add_blank_item(session: DraftSession = Depends(get_draft_session)) -> DraftResponse:
    """Append an empty row."""
    session.editor.add_blank_item()
    return _draft_to_response(session)


@router.patch(
    "/{draft_id}/items/{index}",
    response_model=DraftResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_item(
    index: int,
    request: UpdateItemRequest,
    session: DraftSession = Depends(get_draft_session),
) -> DraftResponse:
    """Edit quantity, price or name of a row; its total is recomputed."""
    session.editor.update_item(index, request.model_dump(exclude_unset=True))
    return _draft_to_response(session)


@router.put(
    "/{draft_id}/items/{index}/product",
    response_model=DraftResponse,
    responses={404: {"model": ErrorResponse}},
)
async def select_product(
    index: int,
    request: SelectProductRequest,
    session: DraftSession = Depends(get_draft_session),
) -> DraftResponse:
    """Point a row at a catalog product."""
    session.editor.select_product(index, request.product_id)
    return _draft_to_response(session)


@router.delete(
    "/{draft_id}/items/{index}/product",
    response_model=DraftResponse,
    responses={404: {"model": ErrorResponse}},
)
async def clear_product(
    index: int,
    session: DraftSession = Depends(get_draft_session),
) -> DraftResponse:
    """Unlink a row from its product so another one can be selected."""
    session.editor.clear_product(index)
    return _draft_to_response(session)


@router.delete(
    "/{draft_id}/items/{index}",
    response_model=DraftResponse,
    responses={404: {"model": ErrorResponse}},
)
async def remove_item(
    index: int,
    session: DraftSession = Depends(get_draft_session),
) -> DraftResponse:
    """Remove a row. The last remaining row is kept."""
    session.editor.remove_item(index)
    return _draft_to_response(session)


# --- Search ---


@router.get("/{draft_id}/search", response_model=ProductListResponse)
async def search(
    q: str = Query(default=""),
    session: DraftSession = Depends(get_draft_session),
) -> ProductListResponse:
    """Update the search box and return the displayed matches."""
    results = session.editor.set_search_query(q)
    return ProductListResponse(
        products=[product_to_response(p) for p in results],
        total=len(results),
    )


@router.post(
    "/{draft_id}/items/from-search",
    response_model=DraftResponse,
    responses={404: {"model": ErrorResponse}},
)
async def add_from_search(
    request: AddFromSearchRequest,
    session: DraftSession = Depends(get_draft_session),
) -> DraftResponse:
    """Append the picked search result as a new row."""
    outcome = session.editor.add_from_search(request.product_id)
    return _draft_to_response(session, outcome.notification)


# --- Barcode ---


@router.post("/{draft_id}/barcode", response_model=DraftResponse)
async def barcode_panel(
    request: BarcodePanelRequest,
    session: DraftSession = Depends(get_draft_session),
) -> DraftResponse:
    """Show or hide the scan panel and set its input."""
    editor = session.editor
    if request.open:
        editor.open_barcode_panel()
    else:
        editor.close_barcode_panel()
    if request.barcode is not None:
        editor.set_barcode_input(request.barcode)
    return _draft_to_response(session)


@router.post(
    "/{draft_id}/items/scan",
    response_model=DraftResponse,
    responses={404: {"model": ErrorResponse}},
)
async def scan_barcode(
    request: ScanBarcodeRequest,
    session: DraftSession = Depends(get_draft_session),
) -> DraftResponse:
    """
    Resolve a barcode and append the product.

    A blank code does nothing. An unknown code returns 404 with a
    "Product not found" notification and leaves the draft untouched.
    """
    outcome = session.editor.scan_barcode(request.barcode)
    return _draft_to_response(session, outcome.notification if outcome else None)


# --- Submit ---


@router.post(
    "/{draft_id}/submit",
    response_model=SubmitDraftResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def submit_draft(
    session: DraftSession = Depends(get_draft_session),
    registry: DraftRegistry = Depends(get_registry),
    use_case: SubmitInvoiceUseCase = Depends(get_submit_invoice_use_case),
) -> SubmitDraftResponse:
    """
    Validate and persist the draft as a completed sale.

    On success the session is closed. On failure the draft stays open and
    unchanged so the operator can retry.
    """
    result = await use_case.execute(session.editor)
    registry.close(session.id)
    return SubmitDraftResponse(
        transaction=use_case.to_response(result.transaction),
        notification=result.notification,
    )
