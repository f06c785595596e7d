import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.handlers import register_exception_handlers
from app.api.router import api_router
from app.core.config import settings
from app.core.database import init_database

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title="Daily Diet - meals and diet metrics")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router)


@app.on_event("startup")
async def startup_event():
    await init_database()
    logger.info("Приложение запущено!")


@app.get("/")
async def root():
    base_url = "http://localhost:8000"

    return {
        "app": "Daily Diet",
        "message": "Daily Diet - track your meals and stay on diet",
        "links": {
            "Users": f"{base_url}/users",
            "Meals": f"{base_url}/meals",
            "Metrics": f"{base_url}/meals/metrics",
            "Docs": f"{base_url}/docs",
        }
    }


@app.get("/health")
async def health():
    return {"status": "ok"}
