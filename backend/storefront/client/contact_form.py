"""Contact Form — local state of the public contact form.

Invariants:
    - is_loading is True only while a submission is in flight; a second
      submit during that window is ignored
    - Success resets every field to "" and shows the server's message
    - A server error keeps the fields and shows the server's error string
    - Transport/decode failures show a generic message
    - Every alert auto-dismisses after alert_timeout seconds; a newer alert
      replaces the current one and re-arms the timer
"""

import asyncio
import logging
from dataclasses import dataclass

from storefront.client.api_client import StorefrontClient
from storefront.core import language_strings as strings
from storefront.core.domain_types import AlertSeverity
from storefront.core.errors import ClientRequestError

logger = logging.getLogger(__name__)

DEFAULT_ALERT_TIMEOUT_SECONDS = 5.0


@dataclass
class Alert:
    message: str
    severity: AlertSeverity


class ContactForm:
    """Form fields plus the transient alert shown under the submit button."""

    def __init__(
        self,
        client: StorefrontClient,
        alert_timeout: float = DEFAULT_ALERT_TIMEOUT_SECONDS,
    ):
        self.client = client
        self.alert_timeout = alert_timeout
        self.name = ""
        self.email = ""
        self.title = ""
        self.content = ""
        self.is_loading = False
        self.alert: Alert | None = None
        self._dismiss_handle: asyncio.TimerHandle | None = None

    async def submit(self) -> bool:
        """Send the message. True on success."""
        if self.is_loading:
            return False
        self.is_loading = True
        try:
            result = await self.client.send_message(
                self.name, self.email, self.title, self.content,
            )
        except ClientRequestError as e:
            logger.warning(f"Contact form submission failed: {e}")
            self._show(Alert(strings.CLIENT_REQUEST_FAILED, AlertSeverity.ERROR))
            return False
        finally:
            self.is_loading = False

        if not result.ok:
            self._show(Alert(
                result.error or strings.CLIENT_REQUEST_FAILED, AlertSeverity.ERROR,
            ))
            return False

        self._show(Alert(result.message or strings.MESSAGE_SENT, AlertSeverity.SUCCESS))
        self.reset()
        return True

    def reset(self) -> None:
        self.name = ""
        self.email = ""
        self.title = ""
        self.content = ""

    def close(self) -> None:
        """Drop the pending alert timer (component unmounted)."""
        if self._dismiss_handle is not None:
            self._dismiss_handle.cancel()
            self._dismiss_handle = None

    def _show(self, alert: Alert) -> None:
        self.close()
        self.alert = alert
        self._dismiss_handle = asyncio.get_running_loop().call_later(
            self.alert_timeout, self._dismiss,
        )

    def _dismiss(self) -> None:
        self.alert = None
        self._dismiss_handle = None
