"""Contact Form — tests for submission state and transient alerts.

Tests cover:
    - Success: server message shown, every field reset
    - Server error: error string shown, fields kept
    - Transport/decode failure: generic message
    - Re-entrant submit while loading is ignored
    - Alerts auto-dismiss; a newer alert re-arms the timer
"""

import asyncio
import json

import httpx

from storefront.client.api_client import StorefrontClient
from storefront.client.contact_form import ContactForm
from storefront.core import language_strings as strings
from storefront.core.domain_types import AlertSeverity

TIMEOUT = 0.05


def _created(request: httpx.Request) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(201, json={
        "message": strings.MESSAGE_SENT,
        "contactMessage": {**body, "id": "5f0c", "isRead": False},
    })


def _form(handler, alert_timeout: float = TIMEOUT) -> ContactForm:
    client = StorefrontClient("http://test", transport=httpx.MockTransport(handler))
    form = ContactForm(client, alert_timeout=alert_timeout)
    form.name = "Иван"
    form.email = "ivan@example.bg"
    form.title = "Въпрос"
    form.content = "Имате ли червило в наличност?"
    return form


# ─── Submission outcomes ─────────────────────────────────────────

async def test_success_resets_fields_and_shows_message():
    form = _form(_created)

    assert await form.submit() is True

    assert (form.name, form.email, form.title, form.content) == ("", "", "", "")
    assert form.alert.message == strings.MESSAGE_SENT
    assert form.alert.severity == AlertSeverity.SUCCESS
    assert form.is_loading is False
    form.close()


async def test_server_error_keeps_fields():
    def handler(request):
        return httpx.Response(400, json={"error": strings.MESSAGE_INVALID_EMAIL})

    form = _form(handler)

    assert await form.submit() is False

    assert form.email == "ivan@example.bg"
    assert form.alert.message == strings.MESSAGE_INVALID_EMAIL
    assert form.alert.severity == AlertSeverity.ERROR
    form.close()


async def test_transport_failure_shows_generic_message():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    form = _form(handler)

    assert await form.submit() is False

    assert form.alert.message == strings.CLIENT_REQUEST_FAILED
    assert form.name == "Иван"
    assert form.is_loading is False
    form.close()


async def test_non_json_response_shows_generic_message():
    def handler(request):
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    form = _form(handler)

    await form.submit()

    assert form.alert.message == strings.CLIENT_REQUEST_FAILED
    form.close()


async def test_submit_while_loading_is_ignored():
    release = asyncio.Event()
    calls = []

    async def handler(request):
        calls.append(request)
        await release.wait()
        return _created(request)

    form = _form(handler)
    first = asyncio.create_task(form.submit())
    await asyncio.sleep(0.01)

    assert form.is_loading is True
    assert await form.submit() is False

    release.set()
    assert await first is True
    assert len(calls) == 1
    form.close()


# ─── Alert timer ─────────────────────────────────────────────────

async def test_alert_dismisses_after_timeout():
    form = _form(_created)
    await form.submit()

    await asyncio.sleep(TIMEOUT * 3)

    assert form.alert is None


async def test_new_alert_rearms_timer():
    def handler(request):
        return httpx.Response(400, json={"error": strings.ALL_FIELDS_REQUIRED})

    form = _form(handler, alert_timeout=0.1)
    await form.submit()
    await asyncio.sleep(0.06)
    await form.submit()
    await asyncio.sleep(0.06)

    assert form.alert is not None

    await asyncio.sleep(0.1)
    assert form.alert is None


async def test_close_cancels_pending_dismissal():
    form = _form(_created)
    await form.submit()

    form.close()
    await asyncio.sleep(TIMEOUT * 3)

    assert form.alert is not None
