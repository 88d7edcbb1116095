from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
import logging

# Import database components
from ferrepos.database.database import engine, Base, SessionLocal

# Import middleware
from ferrepos.common.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware

# Import routers
from ferrepos.modules.auth.router import auth_router
from ferrepos.modules.tenants.router import tenants_router
from ferrepos.modules.subscriptions.router import router as subscriptions_router, admin_invoices_router
from ferrepos.modules.categories.router import categories_router
from ferrepos.modules.products.router import product_router
from ferrepos.modules.customers.router import customers_router
from ferrepos.modules.sales.router import sales_router
from ferrepos.modules.taxes.router import taxes_router
from ferrepos.modules.dashboard.router import dashboard_router

# Import models for table creation
import ferrepos.modules.tenants.models
import ferrepos.modules.subscriptions.models
import ferrepos.modules.categories.models
import ferrepos.modules.products.models
import ferrepos.modules.customers.models
import ferrepos.modules.sales.models

from ferrepos.modules.subscriptions.seed_plans import seed_plans
from ferrepos.core.config import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.ENVIRONMENT == "production" else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(
    title="FerrePOS API",
    description="Punto de venta multi-tenant para ferreterías en Paraguay (IVA 10% / 5%, RUC con DV)",
    version="1.0.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None
)

# Add middleware (order matters!)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Add your frontend URLs
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(subscriptions_router)  # Planes públicos y plan vigente
app.include_router(auth_router, prefix="/auth", tags=["Auth"])
app.include_router(tenants_router)
app.include_router(admin_invoices_router)
app.include_router(categories_router, prefix="/categories", tags=["Categories"])
app.include_router(product_router)
app.include_router(customers_router)
app.include_router(sales_router)
app.include_router(taxes_router)
app.include_router(dashboard_router)


@app.get("/")
def read_root():
    return {
        "message": "FerrePOS API is running",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health")
def health_check():
    return {"status": "healthy", "environment": settings.ENVIRONMENT}


@app.on_event("startup")
def startup_event():
    logger.info("FerrePOS API starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    # Sin migraciones: las tablas se crean al arrancar fuera de producción
    if settings.ENVIRONMENT != "production":
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_plans(db)
    finally:
        db.close()


@app.on_event("shutdown")
def shutdown_event():
    logger.info("FerrePOS API shutting down...")
