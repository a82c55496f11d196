"""
Step definitions for E2E newsletter tests.

These steps test the complete workflow with:
- Real HTTP requests to the Docker API
- Real SMTP delivery to Mailhog
- Mailhog API for email verification
- Direct database access to provision operators and inspect state

Decision: E2E tests verify the complete system integration.
"""

import asyncio
import base64

import asyncpg
from behave import given, then, when

from src.domain.credentials import Credentials

NEWSLETTER_CONTENT = {
    "html": "<p>Newsletter body as HTML</p>",
    "text": "Newsletter body as plain text",
}


@when('I subscribe with name "{name}" and email "{email}"')
def step_subscribe(context, name, email):
    """Submit the subscription form."""
    context.subscriber_email = email
    context.response = context.client.post(
        "/subscriptions", data={"name": name, "email": email}
    )


@when('I subscribe with name "{name}" and no email')
def step_subscribe_without_email(context, name):
    context.response = context.client.post("/subscriptions", data={"name": name})


@given('I subscribed with name "{name}" and email "{email}"')
def step_subscribed(context, name, email):
    step_subscribe(context, name, email)
    assert (
        context.response.status_code == 200
    ), f"Subscription failed: {context.response.status_code} - {context.response.text}"


@then("the response status code should be {status_code:d}")
def step_check_status_code_e2e(context, status_code):
    """Check the response status code."""
    assert context.response.status_code == status_code, (
        f"Expected {status_code}, got {context.response.status_code}. "
        f"Response: {context.response.text}"
    )


@then("a confirmation email should be received within {timeout:d} seconds")
def step_wait_for_confirmation_email(context, timeout=15):
    """
    Wait for the confirmation email to arrive in Mailhog.

    This verifies that the API actually delivered it over SMTP.
    """
    try:
        context.email_message = context.mailhog.wait_for_email(
            to_email=context.subscriber_email, timeout=timeout
        )
    except TimeoutError as e:
        raise AssertionError(
            f"No email received for {context.subscriber_email} within {timeout} seconds. "
            f"Check API logs. Error: {e}"
        ) from e

    context.confirmation_link = context.mailhog.extract_confirmation_link(context.email_message)
    print(f"✓ Confirmation link received for {context.subscriber_email}")


@when("I follow the confirmation link from the email")
def step_follow_confirmation_link(context):
    step_wait_for_confirmation_email(context)
    # The link points at the public base URL; only keep path and query
    path = context.confirmation_link.split("/subscriptions/confirm", 1)[1]
    context.response = context.client.get(f"/subscriptions/confirm{path}")


@given("I followed the confirmation link from the email")
def step_followed_confirmation_link(context):
    step_follow_confirmation_link(context)
    assert context.response.status_code == 200, context.response.text
    context.mailhog.clear_all_messages()


@then('the subscription for "{email}" should be confirmed')
def step_check_confirmed(context, email):
    async def fetch_status():
        conn = await asyncpg.connect(**context.db_config)
        try:
            return await conn.fetchval("SELECT status FROM subscriptions WHERE email = $1", email)
        finally:
            await conn.close()

    status = asyncio.run(fetch_status())
    assert status == "confirmed", f"Expected confirmed, got {status}"


@given('an operator "{username}" with password "{password}"')
def step_create_operator(context, username, password):
    """Provision an operator directly in the database."""
    credentials = Credentials.create(username=username, password=password)

    async def insert():
        conn = await asyncpg.connect(**context.db_config)
        try:
            await conn.execute(
                "INSERT INTO users (user_id, username, password_hash) VALUES ($1, $2, $3)",
                credentials.user_id,
                credentials.username,
                credentials.password_hash,
            )
        finally:
            await conn.close()

    asyncio.run(insert())


@when('I publish a newsletter titled "{title}" without credentials')
def step_publish_anonymously(context, title):
    context.response = context.client.post(
        "/newsletters", json={"title": title, "content": NEWSLETTER_CONTENT}
    )


@when('I publish a newsletter titled "{title}" as "{username}" with password "{password}"')
def step_publish(context, title, username, password):
    encoded = base64.b64encode(f"{username}:{password}".encode()).decode()
    context.response = context.client.post(
        "/newsletters",
        json={"title": title, "content": NEWSLETTER_CONTENT},
        headers={"Authorization": f"Basic {encoded}"},
    )


@then("the response should challenge for Basic credentials")
def step_check_challenge(context):
    header = context.response.headers.get("WWW-Authenticate")
    assert header == 'Basic realm="publish"', f"Unexpected challenge: {header}"


@then('an email titled "{title}" should be received by "{email}"')
def step_check_newsletter_received(context, title, email):
    message = context.mailhog.wait_for_email(to_email=email, timeout=15)
    subject = message.get("Content", {}).get("Headers", {}).get("Subject", [""])[0]
    assert subject == title, f"Expected subject {title!r}, got {subject!r}"
