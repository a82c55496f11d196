"""
API request/response schemas (DTOs).

These Pydantic models define the API contract for requests and responses.
They provide validation, serialization, and documentation.

Decision: Request schemas only check shape (fields present, right type).
Business validation of names and emails lives in the domain value objects.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class SubscribeForm(BaseModel):
    """Form fields for a new subscription."""

    name: str = Field(..., description="Subscriber's name", examples=["le guin"])
    email: str = Field(
        ...,
        description="Subscriber's email address",
        examples=["ursula_le_guin@gmail.com"],
    )


class SubscribeResponse(BaseModel):
    """Response schema for a new subscription."""

    message: str = Field(
        ...,
        description="Success message",
        examples=["Thanks for subscribing! Check your email to confirm your subscription."],
    )


class ConfirmSubscriptionResponse(BaseModel):
    """Response schema for a confirmed subscription."""

    message: str = Field(..., description="Success message", examples=["Subscription confirmed"])


class NewsletterContent(BaseModel):
    """Bodies of a newsletter issue."""

    html: str = Field(..., description="HTML body")
    text: str = Field(..., description="Plain text body")


class PublishNewsletterRequest(BaseModel):
    """Request schema for publishing a newsletter issue."""

    title: str = Field(..., description="Issue title, used as the email subject")
    content: NewsletterContent


class PublishNewsletterResponse(BaseModel):
    """Response schema for a published newsletter issue."""

    message: str = Field(..., description="Success message")
    emails_sent: int = Field(..., description="Number of subscribers the issue was sent to")


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Service status", examples=["healthy"])
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    timestamp: datetime = Field(..., description="Current server time")
