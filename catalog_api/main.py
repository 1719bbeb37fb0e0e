# catalog_api/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_api.config import Settings, load_settings
from catalog_api.errors import CatalogError
from catalog_api.routers import auth, products
from catalog_api.utils.database import init_models, make_engine, make_sessionmaker

logger = logging.getLogger("catalog_api")


def _error_body(request: Request, message: str) -> dict:
    # product routes report {status, message}; the auth routes report {error}
    if request.url.path.startswith("/products"):
        return {"status": "ERROR", "message": message}
    return {"error": message}


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{field}: {err.get('msg')}" if field else err.get("msg", "Invalid request"))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CatalogError)
    async def handle_catalog_error(request: Request, exc: CatalogError):
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=_error_body(request, exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = _describe_validation_errors(exc)
        logger.warning(f"{request.method} {request.url.path} -> 422: {message}")
        return JSONResponse(status_code=422, content=_error_body(request, message))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level)

    engine = make_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application Startup: Creating database tables...")
        await init_models(engine)
        logger.info("Application Startup: Tables created successfully.")
        yield
        await engine.dispose()
        logger.info("Application Shutdown: Goodbye!")

    app = FastAPI(title="Catalog API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = make_sessionmaker(engine)

    app.add_middleware(
        CORSMiddleware, allow_origins=settings.cors_origins, allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )
    register_exception_handlers(app)

    logger.info("Including routers...")
    app.include_router(auth.router)
    app.include_router(products.router)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


app = create_app()
