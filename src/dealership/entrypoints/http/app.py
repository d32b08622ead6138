from fastapi import FastAPI

from dealership.entrypoints.http.exception_handlers import register_exception_handlers
from dealership.entrypoints.http.routes.admin import router as admin_router
from dealership.entrypoints.http.routes.cars import router as cars_router
from dealership.entrypoints.http.routes.health import router as health_router
from dealership.entrypoints.http.routes.saved_cars import router as saved_cars_router
from dealership.entrypoints.http.routes.test_drives import router as test_drives_router
from dealership.infra.logging import configure_logging


def build_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Car Dealership API",
        description="""
        Dealership API for browsing inventory, saving cars and booking test drives.

        ## Features
        - Search the car catalog with facets, sorting and pagination
        - Wishlist (saved cars)
        - Book, list and cancel test drives
        - Admin: manage test-drive status, dashboard, AI listing pre-fill

        ## Authentication
        Handled upstream. The gateway forwards the caller as `X-User-Id`
        and `X-User-Role` (`ADMIN` for staff).

        ## Error Handling
        All errors return structured JSON responses with error codes.
        See the error response schemas in the API documentation.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(cars_router, prefix="/v1")
    app.include_router(saved_cars_router, prefix="/v1")
    app.include_router(test_drives_router, prefix="/v1")
    app.include_router(admin_router, prefix="/v1")

    return app


app = build_app()
