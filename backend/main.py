from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
import logging

from config import CORS_ORIGINS, IS_PRODUCTION, LOG_LEVEL, init_store
from storage import MemStorage
from utils.errors import APIError
from utils.response_helpers import clean_validation_errors

from routers.categories.categories import router as categories_router
from routers.products.products import router as products_router
from routers.users.users import router as users_router
from routers.orders.orders import router as orders_router, user_orders_router
from routers.retailers.retailers import router as retailers_router, user_retailer_router
from routers.retailer_orders.retailer_orders import (
    router as retailer_orders_router, retailer_history_router
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI):
    """Every error leaves the API as {"message": ..., "errors": [...]}"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        body = {"message": str(exc.detail)}
        if isinstance(exc, APIError) and exc.errors:
            body["errors"] = exc.errors
        return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request data", "errors": clean_validation_errors(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_app(store: Optional[MemStorage] = None) -> FastAPI:
    app = FastAPI(
        title="FreshCart API",
        description="Catalogue, cart checkout and retailer bulk ordering for the FreshCart grocery delivery storefront.",
        version="1.0.0",
        root_path="/Prod" if IS_PRODUCTION else "",
        docs_url="/apidocs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        servers=[
            {"url": "https://your-aws-api.execute-api.region.amazonaws.com/Prod", "description": "Production Server"},
            {"url": "http://localhost:8000", "description": "Local Development Server"},
        ],
    )

    app.state.store = store if store is not None else init_store()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(categories_router)
    app.include_router(products_router)
    app.include_router(users_router)
    app.include_router(user_orders_router)
    app.include_router(user_retailer_router)
    app.include_router(orders_router)
    app.include_router(retailers_router)
    app.include_router(retailer_history_router)
    app.include_router(retailer_orders_router)

    @app.get("/docs", include_in_schema=False)
    async def api_documentation(request: Request):
        openapi_url = "/Prod/openapi.json" if IS_PRODUCTION else "/openapi.json"

        return HTMLResponse(
            f"""
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1, shrink-to-fit=no">
    <title>FreshCart API DOCS</title>

    <script src="https://unpkg.com/@stoplight/elements/web-components.min.js"></script>
    <link rel="stylesheet" href="https://unpkg.com/@stoplight/elements/styles.min.css">
  </head>
  <body>

    <elements-api
      apiDescriptionUrl="{openapi_url}"
      router="hash"
      theme="dark"
    />

  </body>
</html>"""
        )

    @app.get("/", response_class=HTMLResponse)
    def home():
        """Landing page with links to the API docs"""
        return """
    <html>
      <head>
        <title>FreshCart API</title>
        <style>
          body { font-family: Arial, sans-serif; margin: 40px; background-color: #f8f9fa; }
          h1 { color: #333; }
          ul { list-style-type: none; padding: 0; }
          li { margin: 10px 0; }
          a { color: #0066cc; text-decoration: none; }
        </style>
      </head>
      <body>
        <h1>Welcome to FreshCart API</h1>
        <hr>
        <ul>
          <li><a href="/docs">Spotlight API Documentation</a></li>
          <li><a href="/redoc">Redoc API Documentation</a></li>
          <li><a href="/apidocs">Swagger API Documentation</a></li>
          <li><a href="/openapi.json">OpenAPI Specification</a></li>
        </ul>
      </body>
    </html>
    """

    logger.info(
        f"FreshCart API ready: {len(app.state.store.categories)} categories, "
        f"{len(app.state.store.products)} products"
    )
    return app


app = create_app()
