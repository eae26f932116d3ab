"""
Inventory Service — Static Form Routes
=======================================

What:  Serves the two HTML forms and a plain-text banner at the root.
How:   Files are read from settings.forms_path (the packaged static/ folder
       unless overridden).
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, PlainTextResponse

from inventory_app.exceptions import NotFoundError

router = APIRouter(tags=["Forms"])


def _form_response(request: Request, filename: str) -> FileResponse:
    path: Path = request.app.state.settings.forms_path / filename
    if not path.is_file():
        raise NotFoundError(resource="form", resource_id=filename)
    return FileResponse(path=str(path), media_type="text/html")


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def index() -> str:
    return "Inventory service is running. Open /RegisterForm.html or /SearchForm.html."


@router.get("/RegisterForm.html", response_class=FileResponse, summary="Registration form")
async def register_form(request: Request) -> FileResponse:
    return _form_response(request, "RegisterForm.html")


@router.get("/SearchForm.html", response_class=FileResponse, summary="Search form")
async def search_form(request: Request) -> FileResponse:
    return _form_response(request, "SearchForm.html")
