"""
RentManager API - Main Application
FastAPI application with CORS, error handling, request logging and all routers
"""
from fastapi import BackgroundTasks, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
import logging
from datetime import datetime, timezone
import traceback

from rentmanager.api.routes import (
    users_router,
    login_router,
    persons_router,
    properties_router,
    admin_properties_router,
    rentals_router,
    admin_rentals_router,
    pricing_router,
    payments_router,
    admin_payments_router,
    bank_accounts_router,
    maintenance_router,
    admin_maintenance_router,
    rental_history_router,
    admin_rental_history_router,
    contracts_router,
    contract_signing_router,
    admin_contract_signing_router,
    emails_router,
    upload_router,
    public_upload_router,
    admin_file_upload_router,
    invitations_router,
    registration_router,
)
from rentmanager.core.config import settings, get_cors_origins, is_testing
from rentmanager.database import test_connection, init_db, close_db_connection
from rentmanager.services import reminder_service, telegram_backup


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.PROJECT_DESCRIPTION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)


# ==================== MIDDLEWARE ====================

app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Accept", "Authorization", "X-Requested-With"],
    expose_headers=["Content-Length", "Content-Disposition", "X-Contract-ID"],
    max_age=43200,
)


# ==================== ROUTERS ====================

# Public
app.include_router(login_router, prefix="/api/users", tags=["Users"])
app.include_router(contract_signing_router, prefix="/api/public/contract-signing")
app.include_router(contract_signing_router, prefix="/api/contract-signing")
app.include_router(public_upload_router, prefix="/api/upload")

# Authenticated
app.include_router(users_router, prefix="/api/users")
app.include_router(persons_router, prefix="/api/persons")
app.include_router(properties_router, prefix="/api/properties")
app.include_router(rentals_router, prefix="/api/rentals")
app.include_router(payments_router, prefix="/api/payments")
app.include_router(bank_accounts_router, prefix="/api/bank-accounts")
app.include_router(maintenance_router, prefix="/api/maintenance-requests")
app.include_router(rental_history_router, prefix="/api/rental-history")
app.include_router(registration_router, prefix="/api/register")
app.include_router(upload_router, prefix="/api/upload")

# Admin
app.include_router(admin_properties_router, prefix="/api/admin/properties")
app.include_router(admin_rentals_router, prefix="/api/admin/rentals")
app.include_router(pricing_router, prefix="/api/admin/pricing")
app.include_router(admin_payments_router, prefix="/api/admin/payments")
app.include_router(admin_maintenance_router, prefix="/api/admin/maintenance-requests")
app.include_router(admin_rental_history_router, prefix="/api/admin/rental-history")
app.include_router(contracts_router, prefix="/api/admin/contracts")
app.include_router(admin_contract_signing_router, prefix="/api/admin/contract-signing")
app.include_router(emails_router, prefix="/api/admin/emails")
app.include_router(admin_file_upload_router, prefix="/api/admin/file-upload")
app.include_router(invitations_router, prefix="/api/admin/invitations")


# ==================== ERROR HANDLERS ====================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies, ids and query values are client errors (400)"""
    logger.warning(f"Validation error on {request.url}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "detail": "Validation error",
            "errors": jsonable_encoder(exc.errors())
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "detail": str(exc),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


# ==================== HEALTH & STATUS ENDPOINTS ====================

@app.get("/", tags=["System"])
async def root():
    """Root endpoint - API information"""
    return {
        "success": True,
        "message": "Welcome to the RentManager API",
        "app_name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "docs": "/api/docs",
        "status": "operational",
        "environment": "production" if not settings.DEBUG else "development"
    }


@app.get("/api/health", tags=["System"])
async def api_health():
    return {"status": "ok"}


@app.get("/health", tags=["System"])
def health_check():
    """Health check including database connectivity"""
    connection_ok = test_connection()
    return {
        "success": True,
        "status": "healthy" if connection_ok else "degraded",
        "database": "connected" if connection_ok else "disconnected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/validate_email", tags=["System"])
def validate_email(background_tasks: BackgroundTasks):
    """Kick off the monthly invoice / anniversary reminder run"""
    background_tasks.add_task(reminder_service.notify_all)
    return {"message": "Email validation process started"}


# ==================== STARTUP & SHUTDOWN ====================

@app.on_event("startup")
async def startup_event():
    logger.info("=" * 70)
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info("=" * 70)
    logger.info(f"Frontend URL: {settings.APP_BASE_URL}")

    if is_testing():
        return

    logger.info("Initializing database tables...")
    if init_db():
        logger.info("[OK] Database initialization complete!")
    else:
        logger.warning("[WARN] Database init returned False - tables may not exist")

    if not settings.email_configured:
        logger.warning("[EMAIL] SMTP is not configured; outgoing emails will be skipped")
    if not settings.storage_configured:
        logger.warning("[UPLOAD] Supabase storage is not configured; file endpoints will answer 503")

    backup = telegram_backup.get_backup_service()
    if backup is not None:
        backup.check_connection()
    else:
        logger.info("[BACKUP] Telegram backup is off; downloaded files are deleted without a copy")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down application...")
    close_db_connection()
    logger.info("Application shutdown complete")


# ==================== REQUEST LOGGING ====================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    if request.url.path in ["/health", "/api/health"]:
        return await call_next(request)

    start_time = datetime.now(timezone.utc)
    client = request.client.host if request.client else "-"
    logger.info(f">> {request.method} {request.url.path} - {client}")

    try:
        response = await call_next(request)
        duration = (datetime.now(timezone.utc) - start_time).total_seconds()
        logger.info(f"<< {request.method} {request.url.path} - {response.status_code} ({duration:.2f}s)")
        return response
    except Exception as e:
        duration = (datetime.now(timezone.utc) - start_time).total_seconds()
        logger.error(f"[ERROR] {request.method} {request.url.path} - Error: {str(e)} ({duration:.2f}s)")
        raise
