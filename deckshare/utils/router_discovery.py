import importlib
import pkgutil

from fastapi import APIRouter, FastAPI
from loguru import logger

API_PACKAGE = "deckshare.api"


def discover_routers(package_name: str = API_PACKAGE) -> list[APIRouter]:
    """Collect the module-level ``router`` of every module in ``package_name``.

    Modules are visited in name order so route registration is stable. Modules
    without a ``router`` attribute are skipped.
    """
    package = importlib.import_module(package_name)
    routers: list[APIRouter] = []

    for module_info in sorted(pkgutil.iter_modules(package.__path__), key=lambda m: m.name):
        if module_info.ispkg or module_info.name.startswith("_"):
            continue

        module = importlib.import_module(f"{package_name}.{module_info.name}")
        router = getattr(module, "router", None)
        if isinstance(router, APIRouter):
            routers.append(router)
            logger.debug(f"Discovered router in {module.__name__}")

    return routers


def register_routers(app: FastAPI, prefix: str = "/api") -> None:
    for router in discover_routers():
        app.include_router(router, prefix=prefix)
