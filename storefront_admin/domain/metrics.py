"""
Derived order metrics shared by the dashboard, order list, customer list and reports.

All functions here are pure: they take already-fetched order documents (plain
dicts) and return new result objects. A malformed record is logged and
skipped so one bad document never blanks out a whole screen.
"""
import logging
from datetime import datetime, timedelta, tzinfo
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from storefront_admin.domain.coercion import to_datetime, to_int, to_number

logger = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"

# Legacy total resolution: newest field name first. The first field holding a
# value wins even if that value does not parse; a stored 0 counts as absent.
LEGACY_TOTAL_FIELDS = ("totalAmount", "total", "totalPrice")

RECORD_ERRORS = (TypeError, ValueError, AttributeError, KeyError)


class OrderLine(BaseModel):
    name: str
    quantity: int
    price: float
    line_total: float


class OrderTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_orders: int = 0
    total_revenue: float = 0.0


class CustomerSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_count: int = 0
    completed_revenue: float = 0.0


# What callers use for a customer that has no orders yet
EMPTY_CUSTOMER_SUMMARY = CustomerSummary()


class SalesBuckets(BaseModel):
    model_config = ConfigDict(frozen=True)

    today: float = 0.0
    week: float = 0.0
    month: float = 0.0
    year: float = 0.0


# ---------------------------------------------------------
# PER-ORDER
# ---------------------------------------------------------

def resolve_legacy_total(order: Mapping[str, Any]) -> float:
    """Coerced value of the first set field among LEGACY_TOTAL_FIELDS, else 0."""
    for field in LEGACY_TOTAL_FIELDS:
        raw = order.get(field)
        if _is_set(raw):
            return to_number(raw)
    return 0.0


def _is_set(raw: Any) -> bool:
    # None, False, "", 0 and NaN are unset
    if raw is None or raw is False or raw == "":
        return False
    if isinstance(raw, (int, float)):
        return raw == raw and raw != 0
    return True


def _raw_items(order: Mapping[str, Any]) -> list:
    items = order.get("items")
    if isinstance(items, (list, tuple)):
        return list(items)
    return []


def order_lines(order: Mapping[str, Any]) -> List[OrderLine]:
    lines = []
    for item in _raw_items(order):
        if not isinstance(item, Mapping):
            continue
        quantity = to_int(item.get("quantity"))
        price = to_number(item.get("price"))
        lines.append(OrderLine(
            name=str(item.get("name") or "N/A"),
            quantity=quantity,
            price=price,
            line_total=quantity * price,
        ))
    return lines


def total_item_count(order: Mapping[str, Any]) -> int:
    return sum(line.quantity for line in order_lines(order))


def effective_total(order: Mapping[str, Any]) -> float:
    """
    The monetary total of an order as shown everywhere on the dashboard.

    The legacy total wins when it is non-zero, even if it disagrees with the
    items. Otherwise the total is rebuilt from quantity x price of each item.
    """
    base = resolve_legacy_total(order)
    if base == 0 and _raw_items(order):
        return sum(line.line_total for line in order_lines(order))
    return base


def is_completable(order: Mapping[str, Any]) -> bool:
    return order.get("status") not in (STATUS_COMPLETED, STATUS_CANCELLED)


# ---------------------------------------------------------
# COLLECTIONS
# ---------------------------------------------------------

def aggregate(orders: Iterable[Mapping[str, Any]]) -> OrderTotals:
    """Every record counts as an order; only completed ones earn revenue."""
    total_orders = 0
    total_revenue = 0.0
    for order in orders:
        total_orders += 1
        try:
            if order.get("status") == STATUS_COMPLETED:
                total_revenue += effective_total(order)
        except RECORD_ERRORS as e:
            _skip(order, e)
    return OrderTotals(total_orders=total_orders, total_revenue=total_revenue)


def summarize_by_customer(orders: Iterable[Mapping[str, Any]]) -> Dict[Any, CustomerSummary]:
    """
    Order count and completed revenue per userId.

    Customers without orders are absent from the result; look them up with
    EMPTY_CUSTOMER_SUMMARY as the default.
    """
    counts: Dict[Any, int] = {}
    revenue: Dict[Any, float] = {}
    for order in orders:
        try:
            user_id = order.get("userId")
            if not user_id:
                logger.warning(f"⚠️ Order {order.get('id')} has no 'userId' field. Excluded from customer summary.")
                continue
            total = effective_total(order) if order.get("status") == STATUS_COMPLETED else 0.0
            counts[user_id] = counts.get(user_id, 0) + 1
            revenue[user_id] = revenue.get(user_id, 0.0) + total
        except RECORD_ERRORS as e:
            _skip(order, e)
    return {
        user_id: CustomerSummary(order_count=count, completed_revenue=revenue[user_id])
        for user_id, count in counts.items()
    }


def bucket_starts(now: datetime) -> Dict[str, datetime]:
    # The week is a rolling window, the other buckets follow the calendar of `now`
    return {
        "today": _midnight(now),
        "week": now - timedelta(days=7),
        "month": _midnight(now, day=1),
        "year": _midnight(now, month=1, day=1),
    }


def bucket_sales(orders: Iterable[Mapping[str, Any]], now: datetime) -> SalesBuckets:
    """Completed sales since each bucket start. Buckets overlap: today's order counts four times."""
    starts = bucket_starts(now)
    sums = dict.fromkeys(starts, 0.0)
    for order in orders:
        try:
            if order.get("status") != STATUS_COMPLETED:
                continue
            created_at = to_datetime(order.get("createdAt"))
            if created_at is None:
                continue
            created_at = _align(created_at, now.tzinfo)
            total = effective_total(order)
            hits = [bucket for bucket, start in starts.items() if created_at >= start]
        except RECORD_ERRORS as e:
            _skip(order, e)
            continue
        for bucket in hits:
            sums[bucket] += total
    return SalesBuckets(**sums)


# ---------------------------------------------------------
# HELPERS
# ---------------------------------------------------------

def _midnight(now: datetime, **fields) -> datetime:
    naive = now.replace(tzinfo=None, hour=0, minute=0, second=0, microsecond=0, **fields)
    return _attach(naive, now.tzinfo)


def _attach(naive: datetime, tz: Optional[tzinfo]) -> datetime:
    if tz is None:
        return naive
    # pytz zones must localize, a plain replace() picks the wrong offset
    localize = getattr(tz, "localize", None)
    return localize(naive) if localize else naive.replace(tzinfo=tz)


def _align(ts: datetime, tz: Optional[tzinfo]) -> datetime:
    """Make ts comparable with datetimes in tz. Naive values are read as wall time in tz."""
    if tz is None:
        return ts if ts.tzinfo is None else ts.astimezone().replace(tzinfo=None)
    if ts.tzinfo is None:
        return _attach(ts, tz)
    return ts


def _skip(order: Any, error: Exception) -> None:
    order_id = order.get("id") if isinstance(order, Mapping) else None
    logger.warning(f"⚠️ Skipping malformed order {order_id or '<unknown>'}: {error}")
