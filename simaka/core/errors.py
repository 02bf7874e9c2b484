"""Handler galat global: semua galat tak tertangani dijawab 500 dalam bentuk JSON."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from simaka.services.report_export_service import ReportExportError

logger = logging.getLogger(__name__)


def _error_body(message: str) -> dict:
    return {"success": False, "error": "Internal Server Error", "message": message}


def add_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ReportExportError)
    async def report_export_error_handler(request: Request, exc: ReportExportError):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(str(exc)),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Galat tak tertangani pada %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(str(exc) or exc.__class__.__name__),
        )
