from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shutterquote.api import calculator, health, products, quotations
from shutterquote.core.errors import QuotationError
from shutterquote.core.logging import setup_logging


def _quotation_error_handler(request: Request, exc: QuotationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title="Shutter Quote", version="0.1.0")

    app.add_exception_handler(QuotationError, _quotation_error_handler)

    # Routers
    app.include_router(health.router, tags=["health"])
    app.include_router(products.router, prefix="/products", tags=["products"])
    app.include_router(calculator.router, prefix="/calculator", tags=["calculator"])
    app.include_router(quotations.router, prefix="/quotations", tags=["quotations"])

    return app


app = create_app()
