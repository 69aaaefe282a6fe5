# uvicorn api.app:app --reload
from fastapi import FastAPI

from common.logging import setup_logging
from core.versions import APP_VERSION

app = FastAPI(title="Quranic collocation engine", version=APP_VERSION)
setup_logging()

from api.routers.analysis import router as analysis_router

app.include_router(analysis_router)
