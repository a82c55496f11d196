"""
Unit tests for RegisterSubscriber use case.

Tests the orchestration logic for a new subscription.
Uses mocks for dependencies to isolate the use case.
"""

import re
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.application.exceptions import UnexpectedError
from src.application.register_subscriber import RegisterSubscriberUseCase
from src.domain.exceptions import InvalidSubscriberEmailError, InvalidSubscriberNameError
from src.domain.subscriber import Subscriber, SubscriptionStatus
from src.domain.subscription_token import SubscriptionToken
from src.infrastructure.email.jinja_email_renderer import JinjaEmailRenderer

LINK_PATTERN = re.compile(
    r"^http://localhost:8000/subscriptions/confirm\?subscription_token=[A-Za-z0-9]{25}$"
)


class TestRegisterSubscriberUseCase:
    """Test RegisterSubscriber use case."""

    @pytest.fixture
    def mock_repository(self) -> AsyncMock:
        """Create a mock repository that echoes the new subscriber's id."""
        repository = AsyncMock()

        async def add_pending(subscriber: Subscriber, token: SubscriptionToken):
            return subscriber.id

        repository.add_pending = AsyncMock(side_effect=add_pending)
        return repository

    @pytest.fixture
    def mock_email_gateway(self) -> AsyncMock:
        gateway = AsyncMock()
        gateway.send_email = AsyncMock()
        return gateway

    @pytest.fixture
    def use_case(
        self, mock_repository: AsyncMock, mock_email_gateway: AsyncMock
    ) -> RegisterSubscriberUseCase:
        return RegisterSubscriberUseCase(
            mock_repository,
            mock_email_gateway,
            JinjaEmailRenderer(),
            base_url="http://localhost:8000/",
        )

    async def test_register_subscriber_success(
        self,
        use_case: RegisterSubscriberUseCase,
        mock_repository: AsyncMock,
        mock_email_gateway: AsyncMock,
    ) -> None:
        subscriber_id = await use_case.execute("le guin", "ursula_le_guin@gmail.com")

        mock_repository.add_pending.assert_awaited_once()
        subscriber, token = mock_repository.add_pending.await_args.args
        assert subscriber.id == subscriber_id
        assert subscriber.status == SubscriptionStatus.PENDING_CONFIRMATION
        assert subscriber.email.value == "ursula_le_guin@gmail.com"

        mock_email_gateway.send_email.assert_awaited_once()
        kwargs = mock_email_gateway.send_email.await_args.kwargs
        assert kwargs["recipient"] == "ursula_le_guin@gmail.com"
        link = use_case.confirmation_link(token)
        assert LINK_PATTERN.match(link)
        assert link in kwargs["text_content"]
        assert link in kwargs["html_content"]

    async def test_invalid_name_does_no_io(
        self,
        use_case: RegisterSubscriberUseCase,
        mock_repository: AsyncMock,
        mock_email_gateway: AsyncMock,
    ) -> None:
        with pytest.raises(InvalidSubscriberNameError):
            await use_case.execute("", "ursula_le_guin@gmail.com")

        mock_repository.add_pending.assert_not_called()
        mock_email_gateway.send_email.assert_not_called()

    async def test_invalid_email_does_no_io(
        self,
        use_case: RegisterSubscriberUseCase,
        mock_repository: AsyncMock,
        mock_email_gateway: AsyncMock,
    ) -> None:
        with pytest.raises(InvalidSubscriberEmailError):
            await use_case.execute("le guin", "definitely-not-an-email")

        mock_repository.add_pending.assert_not_called()
        mock_email_gateway.send_email.assert_not_called()

    async def test_storage_failure_skips_the_email(
        self,
        use_case: RegisterSubscriberUseCase,
        mock_repository: AsyncMock,
        mock_email_gateway: AsyncMock,
    ) -> None:
        mock_repository.add_pending.side_effect = ConnectionError("database is down")

        with pytest.raises(UnexpectedError) as exc_info:
            await use_case.execute("le guin", "ursula_le_guin@gmail.com")

        assert isinstance(exc_info.value.__cause__, ConnectionError)
        mock_email_gateway.send_email.assert_not_called()

    async def test_email_failure_is_unexpected(
        self,
        use_case: RegisterSubscriberUseCase,
        mock_repository: AsyncMock,
        mock_email_gateway: AsyncMock,
    ) -> None:
        mock_email_gateway.send_email.side_effect = OSError("smtp unreachable")

        with pytest.raises(UnexpectedError) as exc_info:
            await use_case.execute("le guin", "ursula_le_guin@gmail.com")

        assert "confirmation email" in str(exc_info.value)
        mock_repository.add_pending.assert_awaited_once()

    async def test_resubscription_returns_the_existing_id(
        self,
        use_case: RegisterSubscriberUseCase,
        mock_repository: AsyncMock,
        mock_email_gateway: AsyncMock,
    ) -> None:
        existing_id = uuid4()
        mock_repository.add_pending = AsyncMock(return_value=existing_id)

        subscriber_id = await use_case.execute("le guin", "ursula_le_guin@gmail.com")

        assert subscriber_id == existing_id
        mock_email_gateway.send_email.assert_awaited_once()

    def test_confirmation_link_strips_trailing_slash(
        self, use_case: RegisterSubscriberUseCase
    ) -> None:
        token = SubscriptionToken("A" * 25)

        assert use_case.confirmation_link(token) == (
            "http://localhost:8000/subscriptions/confirm?subscription_token=" + "A" * 25
        )

    def test_confirmation_email_escapes_the_name(self) -> None:
        rendered = JinjaEmailRenderer().render_confirmation_email(
            subscriber_name="Tom & Jerry", confirmation_link="http://x/confirm"
        )

        assert "Tom &amp; Jerry" in rendered.html_content
        assert "Tom & Jerry" in rendered.text_content
