"""
FastAPI dependency injection.

This module provides dependency injection for our application.
It's the glue that wires together our layers (domain, application, infrastructure).

Decision: Shared process state (database pool, email gateway, renderer,
base URL) is gathered in one frozen ApplicationContext, built once in the
application lifespan and read from app.state. Nothing here is a mutable
module-level singleton, and tests can swap any piece through
app.dependency_overrides.
"""

import logging
from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from config.settings import Settings
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from src.application.confirm_subscription import ConfirmSubscriptionUseCase
from src.application.email_service import EmailGateway, EmailRenderer
from src.application.publish_newsletter import PublishNewsletterUseCase
from src.application.register_subscriber import RegisterSubscriberUseCase
from src.application.validate_credentials import ValidateCredentialsUseCase
from src.domain.credential_repository import CredentialRepository
from src.domain.exceptions import MissingCredentialsError
from src.domain.subscriber_repository import SubscriberRepository
from src.infrastructure.database.connection import DatabaseConnection
from src.infrastructure.database.postgres_credential_repository import (
    PostgresCredentialRepository,
)
from src.infrastructure.database.postgres_subscriber_repository import (
    PostgresSubscriberRepository,
)
from src.infrastructure.email.jinja_email_renderer import JinjaEmailRenderer
from src.infrastructure.email.smtp_email_gateway import SmtpEmailGateway

logger = logging.getLogger(__name__)

PUBLISH_REALM = "publish"


class PublisherBasicAuth(HTTPBasic):
    """
    HTTP Basic Auth that never answers on its own.

    HTTPBasic raises its own HTTPException for a Basic header whose payload
    is not valid base64, even with auto_error=False. Both that case and a
    missing header are reported as None here, so authenticate_publisher
    raises a domain error and the response goes through the shared
    exception handlers.
    """

    async def __call__(self, request: Request) -> HTTPBasicCredentials | None:  # type: ignore[override]
        try:
            return await super().__call__(request)
        except HTTPException:
            return None


# HTTP Basic Auth for the publish endpoint.
publisher_security = PublisherBasicAuth(realm=PUBLISH_REALM, auto_error=False)


@dataclass(frozen=True)
class ApplicationContext:
    """Read-only state shared by every request for the lifetime of the process."""

    database: DatabaseConnection
    email_gateway: EmailGateway
    email_renderer: EmailRenderer
    base_url: str


def build_application_context(settings: Settings) -> ApplicationContext:
    """
    Build the application context from settings.

    The database pool is created but not connected; the lifespan does that.
    """
    logger.info(f"Creating database connection to host: {settings.database_host}")
    database = DatabaseConnection(
        host=settings.database_host,
        port=settings.database_port,
        database=settings.database_name,
        user=settings.database_user,
        password=settings.database_password,
        min_connections=settings.database_min_connections,
        max_connections=settings.database_max_connections,
    )
    email_gateway = SmtpEmailGateway(
        smtp_host=settings.smtp_host,
        smtp_port=settings.smtp_port,
        from_email=settings.smtp_from_email,
        smtp_username=settings.smtp_username,
        smtp_password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
        timeout_seconds=settings.smtp_timeout_seconds,
    )
    return ApplicationContext(
        database=database,
        email_gateway=email_gateway,
        email_renderer=JinjaEmailRenderer(),
        base_url=settings.application_base_url,
    )


def get_application_context(request: Request) -> ApplicationContext:
    """Get the context installed on app.state by the lifespan."""
    context: ApplicationContext = request.app.state.context
    return context


AppContext = Annotated[ApplicationContext, Depends(get_application_context)]


def get_subscriber_repository(context: AppContext) -> SubscriberRepository:
    return PostgresSubscriberRepository(context.database)


def get_credential_repository(context: AppContext) -> CredentialRepository:
    return PostgresCredentialRepository(context.database)


def get_email_gateway(context: AppContext) -> EmailGateway:
    return context.email_gateway


def get_register_subscriber_use_case(
    context: AppContext,
    repository: Annotated[SubscriberRepository, Depends(get_subscriber_repository)],
    email_gateway: Annotated[EmailGateway, Depends(get_email_gateway)],
) -> RegisterSubscriberUseCase:
    """
    Get RegisterSubscriber use case with dependencies injected.

    Args:
        context: Application context (injected)
        repository: Subscriber repository (injected)
        email_gateway: Email gateway (injected)
    """
    return RegisterSubscriberUseCase(
        subscriber_repository=repository,
        email_gateway=email_gateway,
        email_renderer=context.email_renderer,
        base_url=context.base_url,
    )


def get_confirm_subscription_use_case(
    repository: Annotated[SubscriberRepository, Depends(get_subscriber_repository)],
) -> ConfirmSubscriptionUseCase:
    return ConfirmSubscriptionUseCase(repository)


def get_validate_credentials_use_case(
    repository: Annotated[CredentialRepository, Depends(get_credential_repository)],
) -> ValidateCredentialsUseCase:
    return ValidateCredentialsUseCase(repository)


def get_publish_newsletter_use_case(
    repository: Annotated[SubscriberRepository, Depends(get_subscriber_repository)],
    email_gateway: Annotated[EmailGateway, Depends(get_email_gateway)],
) -> PublishNewsletterUseCase:
    return PublishNewsletterUseCase(repository, email_gateway)


async def authenticate_publisher(
    credentials: Annotated[HTTPBasicCredentials | None, Depends(publisher_security)],
    validator: Annotated[ValidateCredentialsUseCase, Depends(get_validate_credentials_use_case)],
) -> UUID:
    """
    Authenticate the caller of the publish endpoint.

    Runs before the request body is used, so a rejected caller never
    causes subscribers to be read.

    Returns:
        The authenticated user's id

    Raises:
        MissingCredentialsError: If the Authorization header is absent or
            not a well-formed Basic header
        InvalidCredentialsError: If the credentials do not match
            (both mapped to 401 by the exception handlers)
    """
    if credentials is None:
        logger.warning("Publish attempted without usable Basic Auth credentials")
        raise MissingCredentialsError()

    return await validator.execute(credentials.username, credentials.password)
