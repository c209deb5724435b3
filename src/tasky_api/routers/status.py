from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from ..schemas import WizFileOut
from ..settings import Settings

ROOT_MESSAGE = "Tasky sample app - connect to /todos"

router = APIRouter(tags=["status"])


def get_app_settings(request: Request) -> Settings:
    """
    FastAPI dependency returning the settings the application was created with.
    """
    return request.app.state.settings


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Root Status",
    description="Fixed plain-text banner. Does not touch the database.",
)
def root_status() -> str:
    """
    Root status endpoint.
    """
    return ROOT_MESSAGE


# PUBLIC_INTERFACE
@router.get(
    "/wiz-file",
    response_model=WizFileOut,
    summary="Read Wiz File",
    description=(
        "Return the contents of the operator-configured file (WIZ_FILE_PATH). "
        "The path is fixed at startup and never taken from the request."
    ),
    responses={
        200: {"description": "File contents"},
        500: {"description": "File missing or unreadable"},
    },
)
def read_wiz_file(settings: Settings = Depends(get_app_settings)) -> WizFileOut:
    """
    Read the fixed file and wrap its contents under 'wiz'.

    Runs in the threadpool so the blocking read does not stall the event loop.
    Errors are not handled here; they surface as a generic 500.
    """
    # Undecodable bytes become U+FFFD rather than failing the request
    with open(settings.wiz_file_path, "r", encoding="utf-8", errors="replace", newline="") as f:
        content = f.read()
    return WizFileOut(wiz=content)
