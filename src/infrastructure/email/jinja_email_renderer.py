"""
Jinja2 implementation of EmailRenderer.

Decision: Using Jinja2 for email templates provides:
- Separation of content from sending logic
- Easy updates by non-developers
- Autoescaping of user-supplied values (subscriber names) in HTML
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.application.email_service import RenderedEmail

TEMPLATES_DIR = Path(__file__).parent / "templates"


class JinjaEmailRenderer:
    """Renders the service's own emails from the templates/ directory."""

    CONFIRMATION_SUBJECT = "Welcome! Please confirm your subscription"

    def __init__(self, templates_dir: Path = TEMPLATES_DIR):
        self.jinja_env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
        )

    def render_confirmation_email(self, subscriber_name: str, confirmation_link: str) -> RenderedEmail:
        context = {"name": subscriber_name, "confirmation_link": confirmation_link}

        return RenderedEmail(
            subject=self.CONFIRMATION_SUBJECT,
            html_content=self.jinja_env.get_template("confirmation_email.html").render(context),
            text_content=self.jinja_env.get_template("confirmation_email.txt").render(context),
        )
