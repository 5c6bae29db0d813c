from importlib.metadata import version as pkg_version

from fastapi import FastAPI

from fowloader.api import health_router, imports_router
from fowloader.config import settings

app = FastAPI(
    title=settings.app_name,
    version=pkg_version("fow-deck-loader"),
)

app.include_router(health_router)
app.include_router(imports_router)
