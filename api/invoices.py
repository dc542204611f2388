"""Dashboard invoice routes: cached listing plus the create/edit/delete form posts."""

from uuid import UUID

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse, Response

from api.base import success_response, error_response, ErrorCodes
from api.config import AppConfig
from api.errors import InvoiceNotFoundError
from api.views import ValkeyViewCache
from core.actions import FormState, InvoiceActions
from core.services.invoice_service import InvoiceService


def _form_response(result: FormState | Response) -> Response | dict:
    """Render an action's outcome: redirects pass through, states become JSON."""
    if not isinstance(result, FormState):
        return result

    if not result.failed:
        return success_response(result.model_dump(exclude_none=True)).model_dump(mode="json")

    if result.errors:
        return JSONResponse(
            status_code=422,
            content=error_response(
                ErrorCodes.VALIDATION_ERROR,
                result.message,
                fields=result.errors,
            ).model_dump(mode="json"),
        )

    return JSONResponse(
        status_code=500,
        content=error_response(ErrorCodes.DATABASE_ERROR, result.message).model_dump(mode="json"),
    )


def create_invoices_router(
    service: InvoiceService,
    actions: InvoiceActions,
    view_cache: ValkeyViewCache,
    config: AppConfig,
) -> APIRouter:
    router = APIRouter(tags=["invoices"])
    route = config.invoices_route

    @router.get(route)
    async def list_invoices(request: Request):
        generation = view_cache.generation(route)
        payload = view_cache.get(route, generation)
        if payload is None:
            invoices = service.list_recent(limit=config.listing_limit)
            payload = [invoice.model_dump(mode="json") for invoice in invoices]
            view_cache.put(route, generation, payload)
        return success_response(payload).model_dump(mode="json")

    @router.get(route + "/{invoice_id}")
    async def get_invoice(invoice_id: UUID):
        invoice = service.get_by_id(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        return success_response(invoice.model_dump(mode="json")).model_dump(mode="json")

    @router.post(route + "/create")
    async def create_invoice(request: Request):
        form = await request.form()
        return _form_response(actions.create_invoice(form))

    @router.post(route + "/{invoice_id}/edit")
    async def update_invoice(request: Request, invoice_id: UUID):
        form = await request.form()
        return _form_response(actions.update_invoice(invoice_id, form))

    @router.post(route + "/{invoice_id}/delete")
    async def delete_invoice(invoice_id: UUID):
        return _form_response(actions.delete_invoice(invoice_id))

    return router
