from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from .config import settings

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def render_template(request: Request, template_name: str, context: dict):
    # Provided context takes precedence over the standard variables
    full_context = {"config": settings, **context}
    return templates.TemplateResponse(request, template_name, full_context)
