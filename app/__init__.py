import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from .version import __version__
from config import ALLOWED_ORIGINS, DEBUG, DOCS, JWT_SECRET_KEY_GENERATED, PROVISION_PLANS_ON_STARTUP

from app.db import GetDB, init_db
from app.exceptions import LuxboardError

logging.basicConfig(
    level=logging.DEBUG if DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger("luxboard")

app = FastAPI(
    title="LuxboardAPI",
    description="Concierge platform API: accounts, plans and metered features",
    version=__version__,
    docs_url="/docs" if DOCS else None,
    redoc_url="/redoc" if DOCS else None,
    debug=DEBUG
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS if ALLOWED_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

from .routers import api_router  # noqa: E402

app.include_router(api_router, prefix="/api")


def use_route_names_as_operation_ids(current_app: FastAPI):
    for route in current_app.routes:
        if isinstance(route, APIRoute):
            route.operation_id = route.name


use_route_names_as_operation_ids(app)


@app.on_event("startup")
def on_startup():
    if JWT_SECRET_KEY_GENERATED:
        logger.warning("JWT_SECRET_KEY is not set, using a random key: sessions will not survive a restart")

    init_db()
    if PROVISION_PLANS_ON_STARTUP:
        from app.services.plan_catalog import provision_plans
        with GetDB() as db:
            plans = provision_plans(db)
        logger.info(f"Plan catalog ready ({len(plans)} plans)")


@app.exception_handler(LuxboardError)
async def luxboard_exception_handler(request: Request, exc: LuxboardError):
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(exc.to_content()),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = {}
    for error in exc.errors():
        loc_key = error["loc"][-1] if error["loc"] and isinstance(error["loc"], (list, tuple)) else "unknown_field"
        details[loc_key] = error.get("msg")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({"detail": details}),
    )
