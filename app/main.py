from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from app.config import settings
from app.core.exceptions import InsightEngineException
from app.logging_config import setup_logging

# IMPORT ROUTERS
from app.routers.health import router as health_router
from app.routers.scoring import router as scoring_router
from app.routers.ab_testing import router as ab_testing_router
from app.routers.sales_forecast import router as sales_forecast_router
from app.routers.analytics import router as analytics_router
from app.routers.errors import insight_exception_handler, validation_exception_handler

setup_logging(level=settings.LOG_LEVEL, json_output=settings.LOG_FORMAT == "json")


# SWAGGER UI — tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Scoring"},
    {"name": "A/B Testing"},
    {"name": "Sales Forecast"},
    {"name": "Analytics"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=f"{settings.APP_NAME} API",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(InsightEngineException, insight_exception_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)          # Health
app.include_router(scoring_router)         # Lead / Contact / Deal scoring
app.include_router(ab_testing_router)      # A/B Testing
app.include_router(sales_forecast_router)  # Sales Forecast
app.include_router(analytics_router)       # Behavioral Analytics


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
