import time
import logging
from dotenv import load_dotenv

# Load environment variables from .env file before anything else
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from hospital_admin.core.config import Settings, settings as default_settings
from hospital_admin.core.errors import StoreError
from hospital_admin.core.logging import setup_logging, request_id_ctx
from hospital_admin.api.router import api_router, build_route_table
from hospital_admin.api.routing import Dispatcher
from hospital_admin.store.store import ResourceStore

logger = logging.getLogger(__name__)

def create_app(settings: Settings | None = None, store: ResourceStore | None = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging()
    app = FastAPI(title=settings.APP_NAME)
    app.state.store = store or ResourceStore(settings)
    app.state.dispatcher = Dispatcher(build_route_table(), app.state.store, settings.API_PREFIX)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000
        logger.info(
            f"Request: {request.method} {request.url.path} - Response: {response.status_code} - Time: {process_time:.2f}ms"
        )
        return response

    # registered last so it runs first and the request id is set for everything below
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        rid = request.headers.get("x-request-id", "-")
        token = request_id_ctx.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers["x-request-id"] = rid
        return response

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.warning(f"{type(exc).__name__} for {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": type(exc).__name__, "message": exc.message})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.critical(f"Unhandled exception for request {request.method} {request.url.path}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "An internal server error occurred."},
        )

    @app.on_event("startup")
    async def on_startup():
        await app.state.store.open()

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.store.close()

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app

app = create_app()
