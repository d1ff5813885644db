# File: /dataview/main.py | Version: 1.2 | Title: FastAPI App (views, view rows, health)
from __future__ import annotations

import importlib
import importlib.util
import logging

from fastapi import FastAPI

from dataview.core.config import settings
from dataview.core.logging import configure_logging
from dataview.observability.sentry import init_sentry_if_configured

# Initialize logging & observability
configure_logging()
init_sentry_if_configured()

log = logging.getLogger(__name__)

app = FastAPI(title="DataView API")


def include_if_exists(module_path: str, attr_name: str = "router") -> bool:
    spec = importlib.util.find_spec(module_path)
    if not spec:
        log.debug("Router module %s not present; skipping", module_path)
        return False
    mod = importlib.import_module(module_path)
    router = getattr(mod, attr_name, None)
    if router is not None:
        app.include_router(router)
        return True
    return False


include_if_exists("dataview.routers.health")
include_if_exists("dataview.routers.views")
include_if_exists("dataview.routers.view_rows")

# Optional standardized error responses
if getattr(settings, "ENABLE_STD_ERRORS", False):
    from dataview.core.error_handlers import register_exception_handlers

    register_exception_handlers(app)
