"""Pages controller — HTML routes for the web UI."""

from pathlib import Path

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from errors import PersistenceError
from api.upload.services import storage_service, upload_service

router = APIRouter(tags=["Pages"])

TEMPLATES_DIR = Path(__file__).parent.parent.parent.parent.parent / "templates"

templates = Jinja2Templates(directory=TEMPLATES_DIR)


def _filesize(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024**2:
        return f"{size / 1024:.1f} KB"
    if size < 1024**3:
        return f"{size / 1024**2:.1f} MB"
    return f"{size / 1024**3:.1f} GB"


templates.env.filters["filesize"] = _filesize


def _index(request: Request, status_code: int = 200, **context):
    context.setdefault("upload", None)
    context.setdefault("error", None)
    return templates.TemplateResponse(
        request, "index.html", context, status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    return _index(request)


@router.post("/upload", response_class=HTMLResponse)
async def form_upload(
    request: Request,
    file: UploadFile = File(...),
    password: str = Form(""),
):
    """Upload from the web page and show the shareable link."""
    try:
        storage_service.sanitize_filename(file.filename or "")
        password = upload_service.normalize_password(password)
    except ValueError as e:
        return _index(request, status_code=400, error=str(e))

    try:
        upload = await upload_service.save_form_upload(request, file, password)
    except ValueError as e:
        return _index(request, status_code=413, error=str(e))
    except PersistenceError:
        return _index(request, status_code=503, error="Storage temporarily unavailable")

    return _index(request, upload=upload)
