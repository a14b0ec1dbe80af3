"""FastAPI entrypoint for the CancerScan prediction service."""
import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, settings as default_settings
from .errors import register_error_handlers
from .routes import predict, status
from .services.models import ModelHolder, load_from_settings
from .utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    loader_task = None
    if settings.load_on_startup:
        # Runs in a worker thread so /status stays responsive while loading.
        loader_task = asyncio.create_task(
            asyncio.to_thread(load_from_settings, app.state.model_holder, settings)
        )
    app.state.loader_task = loader_task
    yield
    if loader_task is not None and not loader_task.done():
        loader_task.cancel()


def create_app(settings: Optional[Settings] = None, holder: Optional[ModelHolder] = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title="CancerScan Prediction API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.model_holder = holder or ModelHolder()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(status.router, tags=["system"])
    app.include_router(predict.router, tags=["prediction"])
    return app


app = create_app()
