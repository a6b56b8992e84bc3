import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from storefront_admin.application.dashboard_service import (
    DashboardService,
    OrderNotCompletableError,
    OrderNotFoundError,
    ProductNotFoundError,
)
from storefront_admin.application.view_models import (
    CustomerList,
    DashboardSummary,
    OrderDetail,
    OrderList,
    OrderRow,
    ProductList,
    SalesReport,
)
from storefront_admin.domain import labels
from storefront_admin.interfaces.IDocumentStore import DocumentStoreError

router = APIRouter()
logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def get_service(request: Request) -> DashboardService:
    """The service lives on app.state, wired in the composition root."""
    return request.app.state.dashboard


def _unavailable(e: DocumentStoreError) -> HTTPException:
    logger.error(f"❌ Store unavailable: {e}")
    return HTTPException(status_code=503, detail="Document store unavailable")


# ---------------------------------------------------------
# JSON API
# ---------------------------------------------------------

@router.get("/api/dashboard", response_model=DashboardSummary)
def dashboard(request: Request):
    return get_service(request).dashboard_summary()


@router.get("/api/orders", response_model=OrderList)
def orders(request: Request):
    return get_service(request).list_orders()


@router.get("/api/orders/{order_id}", response_model=OrderDetail)
def order_detail(order_id: str, request: Request):
    try:
        return get_service(request).order_detail(order_id)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Pesanan tidak ditemukan")
    except DocumentStoreError as e:
        raise _unavailable(e)


def _complete(request: Request, order_id: str) -> OrderRow:
    try:
        return get_service(request).mark_order_completed(order_id)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Pesanan tidak ditemukan")
    except OrderNotCompletableError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except DocumentStoreError as e:
        raise _unavailable(e)


@router.post("/api/orders/{order_id}/complete", response_model=OrderRow)
def complete_order(order_id: str, request: Request):
    return _complete(request, order_id)


@router.get("/api/customers", response_model=CustomerList)
def customers(request: Request):
    return get_service(request).list_customers()


@router.get("/api/reports", response_model=SalesReport)
def reports(request: Request):
    return get_service(request).sales_report()


@router.get("/api/products", response_model=ProductList)
def products(request: Request):
    return get_service(request).list_products()


@router.delete("/api/products/{product_id}")
def delete_product(product_id: str, request: Request):
    try:
        get_service(request).delete_product(product_id)
    except ProductNotFoundError:
        raise HTTPException(status_code=404, detail="Produk tidak ditemukan")
    except DocumentStoreError as e:
        raise _unavailable(e)
    return {"deleted": True}


# ---------------------------------------------------------
# HTML DASHBOARD
# ---------------------------------------------------------

SECTION_LOADERS = {
    "dashboard": DashboardService.dashboard_summary,
    "products": DashboardService.list_products,
    "orders": DashboardService.list_orders,
    "customers": DashboardService.list_customers,
    "reports": DashboardService.sales_report,
}


@router.get("/admin", response_class=HTMLResponse)
def admin_page(request: Request, section: str = "dashboard"):
    if section not in SECTION_LOADERS:
        section = "dashboard"
    view = SECTION_LOADERS[section](get_service(request))
    return templates.TemplateResponse(request, "dashboard.html", {
        "section": section,
        "page_title": labels.PAGE_TITLES.get(section, "Dashboard"),
        "view": view,
        "labels": labels,
    })


@router.post("/admin/orders/{order_id}/complete")
def admin_complete_order(order_id: str, request: Request):
    """Form target of the ✓ button; lands the admin back on the order list."""
    _complete(request, order_id)
    return RedirectResponse(url="/admin?section=orders", status_code=303)
