import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from asset_inventory.config import settings
from asset_inventory.db import init_db
from asset_inventory.errors import install_error_handlers
from asset_inventory.routers import assets, locations, tools

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    logger.info('%s ready', settings.app_name)
    yield


configure_logging(settings.log_level)

app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

install_error_handlers(app)

api = APIRouter(prefix='/api')


@api.get('/health')
def health_check() -> dict:
    return {'status': 'ok', 'timestamp': datetime.now(timezone.utc).isoformat()}


api.include_router(assets.router)
api.include_router(locations.router)
api.include_router(tools.router)
app.include_router(api)
