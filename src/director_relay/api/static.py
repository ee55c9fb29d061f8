"""
Static web UI with single-page-app fallback.
"""

from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from ..config import get_config

router = APIRouter()


@router.get("/{full_path:path}", include_in_schema=False)
async def static_files(full_path: str):
    """Serve a file from the UI directory, or index.html for client-side routes."""
    if full_path == "api" or full_path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not found")

    root = Path(get_config().static_dir).resolve()
    if not root.is_dir():
        raise HTTPException(status_code=404, detail="Not found")

    if full_path:
        candidate = (root / full_path).resolve()
        if candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)

    index = root / "index.html"
    if index.is_file():
        return FileResponse(index)
    raise HTTPException(status_code=404, detail="Not found")
