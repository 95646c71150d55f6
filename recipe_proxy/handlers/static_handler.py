"""Landing page and static asset serving."""
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse
from starlette.exceptions import HTTPException
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

from recipe_proxy.utils.responses import NOT_FOUND_MESSAGE, error_response

router = APIRouter()

INDEX_FILE = "index.html"


class PublicFiles(StaticFiles):
    """StaticFiles that never exposes dotfiles such as ``.env``."""

    async def get_response(self, path: str, scope: Scope):
        if any(segment.startswith(".") for segment in Path(path).parts):
            raise HTTPException(status_code=404)
        return await super().get_response(path, scope)


@router.get("/", include_in_schema=False)
async def index(request: Request):
    index_path = Path(request.app.state.settings.static_dir) / INDEX_FILE
    if not index_path.is_file():
        return error_response(404, NOT_FOUND_MESSAGE)
    return FileResponse(index_path)
