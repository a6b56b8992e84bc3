"""
Structured results handed to the rendering layer.

Numbers stay numbers; the matching display strings are filled in next to them
so the JSON API and the HTML page show exactly the same text.
"""
from typing import List, Optional

from pydantic import BaseModel


class OrderRow(BaseModel):
    id: str
    short_id: str
    customer_name: str
    total: float
    total_display: str
    status: Optional[str] = None
    status_text: str
    status_class: str
    created_at_display: str
    can_complete: bool = False


class OrderLineRow(BaseModel):
    name: str
    quantity: int
    price: float
    line_total: float
    price_display: str
    line_total_display: str


class OrderDetail(BaseModel):
    id: str
    customer_name: str
    total_items: int
    status: Optional[str] = None
    status_text: str
    status_class: str
    created_at_display: str
    lines: List[OrderLineRow] = []
    total: float
    total_display: str


class DashboardSummary(BaseModel):
    total_products: int = 0
    total_orders: int = 0
    total_revenue: float = 0.0
    total_revenue_display: str = ""
    total_customers: int = 0
    recent_orders: List[OrderRow] = []
    notice: Optional[str] = None


class OrderList(BaseModel):
    orders: List[OrderRow] = []
    notice: Optional[str] = None


class CustomerRow(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    order_count: int
    completed_revenue: float
    completed_revenue_display: str
    created_at_display: str


class CustomerList(BaseModel):
    customers: List[CustomerRow] = []
    notice: Optional[str] = None


class SalesReport(BaseModel):
    today: float = 0.0
    week: float = 0.0
    month: float = 0.0
    year: float = 0.0
    today_display: str = ""
    week_display: str = ""
    month_display: str = ""
    year_display: str = ""
    notice: Optional[str] = None


class ProductRow(BaseModel):
    id: str
    name: str
    category: str
    price: float
    price_display: str
    stock: int
    image: str


class ProductList(BaseModel):
    products: List[ProductRow] = []
    notice: Optional[str] = None
