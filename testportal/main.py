import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from testportal.core.config import CORS_ORIGINS, LOG_LEVEL
from testportal.core.errors import (
    VerificationError,
    request_validation_handler,
    verification_error_handler,
)
from testportal.core.logging_middleware import LoggingMiddleware
from testportal.routers.pages import router as pages_router
from testportal.routers.verify import router as verify_router

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(title="TestPortal")

# Middleware
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Errors reach the browser as {"success": false, "message": ...}
app.add_exception_handler(VerificationError, verification_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Include routers
app.include_router(verify_router, prefix="/api", tags=["verify"])
app.include_router(pages_router)
