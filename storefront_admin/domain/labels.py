# Display text for the admin dashboard (Indonesian storefront).

STATUS_TEXTS = {
    "pending": "Menunggu",
    "processing": "Diproses",
    "shipped": "Dikirim",
    "completed": "Selesai",
    "cancelled": "Dibatalkan",
}

PAGE_TITLES = {
    "dashboard": "Dashboard",
    "products": "Manajemen Produk",
    "orders": "Manajemen Pesanan",
    "customers": "Manajemen Pelanggan",
    "reports": "Laporan Penjualan",
    "settings": "Pengaturan",
}

# Indonesian short month names, January first
MONTHS_SHORT = ("Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des")

PLACEHOLDER = "N/A"
PRODUCT_IMAGE_PLACEHOLDER = "https://via.placeholder.com/50"

EMPTY_ORDERS = "📭 Belum ada pesanan"
EMPTY_PRODUCTS = "📦 Belum ada produk"
EMPTY_CUSTOMERS = "👥 Belum ada pelanggan"

# Non-blocking notices shown when the store cannot be reached
NOTICE_DASHBOARD = "Gagal memuat statistik dashboard."
NOTICE_ORDERS = "Gagal memuat data pesanan."
NOTICE_CUSTOMERS = "Gagal memuat data pelanggan."
NOTICE_REPORTS = "Gagal memuat laporan penjualan."
NOTICE_PRODUCTS = "Gagal memuat data produk."
