"""
HTML login page for newsletter operators.

Decision: Failed logins redirect back to the form with a short-lived
_flash cookie instead of rendering an error directly, so refreshing the
page never resubmits the credentials.
"""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from src.application.validate_credentials import ValidateCredentialsUseCase
from src.domain.exceptions import AuthenticationError
from src.presentation.dependencies import get_validate_credentials_use_case

FLASH_COOKIE = "_flash"
LOGIN_FAILED_MESSAGE = "Authentication failed."

templates = Jinja2Templates(directory=Path(__file__).parent / "templates")

router = APIRouter(tags=["login"])


@router.get("/login", response_class=HTMLResponse, summary="Operator login form")
async def login_form(request: Request) -> HTMLResponse:
    """Render the form, showing and consuming any pending flash message."""
    flash_message = request.cookies.get(FLASH_COOKIE)
    response = templates.TemplateResponse(
        request, "login.html", {"flash_message": flash_message}
    )
    if flash_message is not None:
        response.delete_cookie(FLASH_COOKIE)
    return response


@router.post("/login", summary="Submit operator credentials")
async def login(
    username: Annotated[str, Form()],
    password: Annotated[str, Form()],
    use_case: Annotated[ValidateCredentialsUseCase, Depends(get_validate_credentials_use_case)],
) -> RedirectResponse:
    try:
        await use_case.execute(username, password)
    except AuthenticationError:
        response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
        response.set_cookie(FLASH_COOKIE, LOGIN_FAILED_MESSAGE)
        return response

    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
