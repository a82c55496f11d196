"""
FastAPI routes for subscriptions and newsletter publishing.

This module defines the HTTP API endpoints.
Each route is thin - it just handles HTTP concerns and delegates to use cases.
Errors are translated to responses in error_handlers.py.
"""

import logging
from datetime import UTC, datetime
from typing import Annotated
from uuid import UUID

from config.settings import settings
from fastapi import APIRouter, Depends, Form, Query, status

from src.application.confirm_subscription import ConfirmSubscriptionUseCase
from src.application.publish_newsletter import PublishNewsletterUseCase
from src.application.register_subscriber import RegisterSubscriberUseCase
from src.presentation.dependencies import (
    authenticate_publisher,
    get_confirm_subscription_use_case,
    get_publish_newsletter_use_case,
    get_register_subscriber_use_case,
)
from src.presentation.schemas import (
    ConfirmSubscriptionResponse,
    ErrorResponse,
    HealthCheckResponse,
    PublishNewsletterRequest,
    PublishNewsletterResponse,
    SubscribeForm,
    SubscribeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["newsletter"])


@router.post(
    "/subscriptions",
    response_model=SubscribeResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid name or email"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Subscribe to the newsletter",
    description="""
    Subscribe with a name and an email address (form-encoded).

    A confirmation link is emailed to the address. The subscription stays
    pending until the link is followed.
    """,
)
async def subscribe(
    form: Annotated[SubscribeForm, Form()],
    use_case: Annotated[RegisterSubscriberUseCase, Depends(get_register_subscriber_use_case)],
) -> SubscribeResponse:
    await use_case.execute(name=form.name, email=form.email)
    return SubscribeResponse(
        message="Thanks for subscribing! Check your email to confirm your subscription."
    )


@router.get(
    "/subscriptions/confirm",
    response_model=ConfirmSubscriptionResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "Missing subscription_token"},
        401: {"model": ErrorResponse, "description": "Unknown subscription token"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Confirm a pending subscription",
)
async def confirm_subscription(
    subscription_token: Annotated[str, Query()],
    use_case: Annotated[ConfirmSubscriptionUseCase, Depends(get_confirm_subscription_use_case)],
) -> ConfirmSubscriptionResponse:
    """
    Confirm a subscription from the link in the confirmation email.

    Decision: Following the link twice is not an error. The subscriber
    simply stays confirmed.
    """
    await use_case.execute(subscription_token)
    return ConfirmSubscriptionResponse(message="Subscription confirmed")


@router.post(
    "/newsletters",
    response_model=PublishNewsletterResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request body"},
        401: {"model": ErrorResponse, "description": "Authentication failed"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Publish a newsletter issue",
    description="""
    Send an issue to every confirmed subscriber.

    Authentication: HTTP Basic Auth (username:password)
    """,
)
async def publish_newsletter(
    request: PublishNewsletterRequest,
    user_id: Annotated[UUID, Depends(authenticate_publisher)],
    use_case: Annotated[PublishNewsletterUseCase, Depends(get_publish_newsletter_use_case)],
) -> PublishNewsletterResponse:
    logger.info(f"User {user_id} is publishing '{request.title}'")
    emails_sent = await use_case.execute(
        title=request.title,
        html_content=request.content.html,
        text_content=request.content.text,
    )
    return PublishNewsletterResponse(message="Newsletter published", emails_sent=emails_sent)


@router.get(
    "/health_check",
    response_model=HealthCheckResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Check if the service is running",
    tags=["health"],
)
async def health_check() -> HealthCheckResponse:
    return HealthCheckResponse(
        status="healthy",
        service=settings.app_name,
        version=settings.app_version,
        timestamp=datetime.now(UTC),
    )
