import logging
import time
from fastapi import FastAPI
from sqlalchemy.exc import OperationalError
from storefront_admin.core.config import settings

# 1. Infrastructure & Domain Imports
from storefront_admin.domain.models import Document  # noqa: F401  (registers the table)
from storefront_admin.infrastructure.database import engine, Base
from storefront_admin.infrastructure.repositories.document_store import SqlDocumentStore
from storefront_admin.application.dashboard_service import DashboardService
from storefront_admin.interfaces import admin_routes

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

# ---------------------------------------------------------
# DATABASE CONNECTION (With Retry Logic)
# ---------------------------------------------------------
for attempt in range(settings.DB_CONNECT_RETRIES):
    try:
        logger.info(f"🔄 Attempting DB connection ({attempt + 1}/{settings.DB_CONNECT_RETRIES})...")
        Base.metadata.create_all(bind=engine)
        logger.info("✅ DB Connected and Tables Created.")
        break
    except OperationalError:
        logger.warning(f"⚠️ DB not ready yet. Waiting {settings.DB_RETRY_WAIT_SECONDS}s...")
        time.sleep(settings.DB_RETRY_WAIT_SECONDS)
else:
    # Reads will degrade to notices until the store comes back
    logger.error("❌ Could not connect to DB after retries.")

# ---------------------------------------------------------
# COMPOSITION ROOT
# ---------------------------------------------------------
app.state.dashboard = DashboardService(store=SqlDocumentStore())

# Include Routers
app.include_router(admin_routes.router)

@app.get("/")
def health_check():
    return {"status": "active", "system": settings.PROJECT_NAME}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
