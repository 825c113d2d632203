import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from motor_market.entrypoints.http.exception_handlers import register_exception_handlers
from motor_market.entrypoints.http.routes.dashboard import router as dashboard_router
from motor_market.entrypoints.http.routes.health import router as health_router
from motor_market.entrypoints.http.routes.listings import router as listings_router
from motor_market.entrypoints.http.routes.uploads import router as uploads_router
from motor_market.infra.storage.config import image_public_base_url, image_storage_dir

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def build_app() -> FastAPI:
    app = FastAPI(
        title="Motor Market API",
        description="""
        Vehicle marketplace API for browsing, publishing and saving listings.

        ## Features
        - Browse listings with filters, sorting and pagination
        - Publish and delete your own listings
        - Save listings and see them on your dashboard
        - Upload listing photos

        ## Authentication
        Handled by the identity provider in front of this API, which forwards
        `X-User-Id` (and optionally `X-User-Email`). Browsing is anonymous;
        publishing, deleting, saving and uploading require a signed-in user.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        contact={
            "name": "Motor Market Team",
            "email": "dev@motor-market.example",
        },
        license_info={
            "name": "Proprietary",
        },
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(listings_router, prefix="/v1")
    app.include_router(dashboard_router, prefix="/v1")
    app.include_router(uploads_router, prefix="/v1")

    # Serve locally stored uploads unless they live behind an external CDN
    base_url = image_public_base_url()
    if base_url.startswith("/"):
        app.mount(
            base_url,
            StaticFiles(directory=image_storage_dir(), check_dir=False),
            name="uploads",
        )

    return app


app = build_app()
