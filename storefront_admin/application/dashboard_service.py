import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

import pytz

from storefront_admin.core.config import settings
from storefront_admin.domain import labels
from storefront_admin.domain.coercion import to_int, to_number
from storefront_admin.domain.metrics import (
    EMPTY_CUSTOMER_SUMMARY,
    STATUS_COMPLETED,
    aggregate,
    bucket_sales,
    effective_total,
    is_completable,
    order_lines,
    summarize_by_customer,
    total_item_count,
)
from storefront_admin.interfaces.IDocumentStore import IDocumentStore, DocumentStoreError, ORDERS, PRODUCTS, USERS
from storefront_admin.interfaces.rendering import (
    format_currency,
    format_date,
    or_placeholder,
    short_id,
    status_class,
    status_text,
)
from storefront_admin.application.view_models import (
    CustomerList,
    CustomerRow,
    DashboardSummary,
    OrderDetail,
    OrderLineRow,
    OrderList,
    OrderRow,
    ProductList,
    ProductRow,
    SalesReport,
)

logger = logging.getLogger(__name__)


def _status_of(order: Mapping[str, Any]) -> Optional[str]:
    # Unknown statuses are shown verbatim
    status = order.get("status")
    return str(status) if status is not None else None


class OrderNotFoundError(LookupError):
    pass


class ProductNotFoundError(LookupError):
    pass


class OrderNotCompletableError(ValueError):
    """The order is already completed or cancelled."""


class DashboardService:
    """
    The four screens that re-derive metrics from raw orders (dashboard,
    orders, customers, reports) plus the product list and the two actions.

    Reads never raise on store failure: the view model comes back empty with
    a notice, and no aggregation runs for that refresh.
    """

    def __init__(self, store: IDocumentStore, timezone: Optional[str] = None, recent_limit: Optional[int] = None):
        self.store = store
        self.tz = pytz.timezone(timezone or settings.TIMEZONE)
        self.recent_limit = recent_limit or settings.RECENT_ORDERS_LIMIT

    # --- DASHBOARD ---

    def dashboard_summary(self) -> DashboardSummary:
        try:
            products = self.store.fetch_all(PRODUCTS)
            orders = self.store.fetch_all(ORDERS)
            customers = self.store.fetch_where(USERS, "role", "customer")
            recent = self.store.fetch_latest(ORDERS, limit=self.recent_limit)
        except DocumentStoreError as e:
            logger.error(f"❌ Error loading dashboard stats: {e}")
            return DashboardSummary(notice=labels.NOTICE_DASHBOARD)

        totals = aggregate(orders)
        return DashboardSummary(
            total_products=len(products),
            total_orders=totals.total_orders,
            total_revenue=totals.total_revenue,
            total_revenue_display=format_currency(totals.total_revenue),
            total_customers=len(customers),
            recent_orders=[self._order_row(order) for order in recent],
        )

    # --- ORDERS ---

    def list_orders(self) -> OrderList:
        try:
            orders = self.store.fetch_latest(ORDERS)
        except DocumentStoreError as e:
            logger.error(f"❌ Error loading orders: {e}")
            return OrderList(notice=labels.NOTICE_ORDERS)
        return OrderList(orders=[self._order_row(order) for order in orders])

    def order_detail(self, order_id: str) -> OrderDetail:
        order = self.store.fetch_by_id(ORDERS, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        lines = [
            OrderLineRow(
                name=line.name,
                quantity=line.quantity,
                price=line.price,
                line_total=line.line_total,
                price_display=format_currency(line.price),
                line_total_display=format_currency(line.line_total),
            )
            for line in order_lines(order)
        ]
        total = effective_total(order)
        status = _status_of(order)
        return OrderDetail(
            id=order["id"],
            customer_name=or_placeholder(order.get("customerName")),
            total_items=total_item_count(order),
            status=status,
            status_text=status_text(status),
            status_class=status_class(status),
            created_at_display=format_date(order.get("createdAt"), self.tz),
            lines=lines,
            total=total,
            total_display=format_currency(total),
        )

    def mark_order_completed(self, order_id: str) -> OrderRow:
        order = self.store.fetch_by_id(ORDERS, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if not is_completable(order):
            raise OrderNotCompletableError(f"Order {order_id} is already {order.get('status')}")
        if not self.store.update(ORDERS, order_id, {"status": STATUS_COMPLETED}):
            # Deleted between the read and the write
            raise OrderNotFoundError(order_id)
        logger.info(f"✅ Order {order_id} marked as completed")
        return self._order_row({**order, "status": STATUS_COMPLETED})

    # --- CUSTOMERS ---

    def list_customers(self) -> CustomerList:
        try:
            customers = self.store.fetch_where(USERS, "role", "customer")
            if not customers:
                return CustomerList()
            orders = self.store.fetch_all(ORDERS)
        except DocumentStoreError as e:
            logger.error(f"❌ Error loading customers: {e}")
            return CustomerList(notice=labels.NOTICE_CUSTOMERS)

        summaries = summarize_by_customer(orders)
        rows = []
        for customer in customers:
            summary = summaries.get(customer["id"], EMPTY_CUSTOMER_SUMMARY)
            rows.append(CustomerRow(
                id=customer["id"],
                name=or_placeholder(customer.get("name")),
                email=or_placeholder(customer.get("email")),
                phone=or_placeholder(customer.get("phone")),
                order_count=summary.order_count,
                completed_revenue=summary.completed_revenue,
                completed_revenue_display=format_currency(summary.completed_revenue),
                created_at_display=format_date(customer.get("createdAt"), self.tz),
            ))
        return CustomerList(customers=rows)

    # --- REPORTS ---

    def sales_report(self, now: Optional[datetime] = None) -> SalesReport:
        try:
            orders = self.store.fetch_all(ORDERS)
        except DocumentStoreError as e:
            logger.error(f"❌ Error loading reports: {e}")
            return SalesReport(notice=labels.NOTICE_REPORTS)

        buckets = bucket_sales(orders, now or datetime.now(self.tz))
        data: Dict[str, Any] = buckets.model_dump()
        for bucket, amount in buckets.model_dump().items():
            data[f"{bucket}_display"] = format_currency(amount)
        return SalesReport(**data)

    # --- PRODUCTS ---

    def list_products(self) -> ProductList:
        try:
            products = self.store.fetch_all(PRODUCTS)
        except DocumentStoreError as e:
            logger.error(f"❌ Error loading products: {e}")
            return ProductList(notice=labels.NOTICE_PRODUCTS)
        return ProductList(products=[self._product_row(product) for product in products])

    def delete_product(self, product_id: str) -> None:
        if not self.store.delete(PRODUCTS, product_id):
            raise ProductNotFoundError(product_id)
        logger.info(f"🗑️ Product {product_id} deleted")

    # --- HELPERS ---

    def _order_row(self, order: Mapping[str, Any]) -> OrderRow:
        total = effective_total(order)
        status = _status_of(order)
        return OrderRow(
            id=order["id"],
            short_id=short_id(order["id"]),
            customer_name=or_placeholder(order.get("customerName")),
            total=total,
            total_display=format_currency(total),
            status=status,
            status_text=status_text(status),
            status_class=status_class(status),
            created_at_display=format_date(order.get("createdAt"), self.tz),
            can_complete=is_completable(order),
        )

    @staticmethod
    def _product_row(product: Mapping[str, Any]) -> ProductRow:
        price = to_number(product.get("price"))
        return ProductRow(
            id=product["id"],
            name=or_placeholder(product.get("name")),
            category=or_placeholder(product.get("category")),
            price=price,
            price_display=format_currency(price),
            stock=to_int(product.get("stock")),
            image=product.get("image") or labels.PRODUCT_IMAGE_PLACEHOLDER,
        )
