"""
csrfguard - Double-submit CSRF token issuance and validation service.

Features:
- Token issuance behind a shared-secret Authorization check
- Stateless request gate verifying x-csrf-token against x-csrf-raw
- Structured logging with correlation IDs
- Prometheus metrics

Entry point for ``uvicorn csrfguard.main:app``. Importing this module reads
settings from the environment and configures logging; hosts embedding
csrfguard should call ``csrfguard.create_app`` instead.
"""
from .app import create_app
from .config import get_settings
from .logging import SERVICE_NAME, setup_logging

# Initialize configuration
settings = get_settings()

# Setup logging
setup_logging(json_output=settings.LOG_JSON, service_name=SERVICE_NAME)

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "csrfguard.main:app",
        host="0.0.0.0",
        port=settings.SERVICE_PORT,
    )
