"""
Messaging hand-off: turns a validated submission into a deep link and asks
the host environment to open it in a new browsing context.
"""

import logging
import webbrowser
from typing import Callable, List, Optional
from urllib.parse import quote

from pydantic import BaseModel, Field

from portfolio.core.config import Settings, settings
from portfolio.core.exceptions import HandoffError
from portfolio.core.logging import get_logger, log_event
from portfolio.schemas.contact import ContactRecord

logger = get_logger(__name__)

# Characters encodeURIComponent leaves untouched besides letters and digits
_URI_COMPONENT_SAFE = "-_.!~*'()"

Opener = Callable[[str], bool]


class DirectContactLink(BaseModel):
    """A link shown beside the form for reaching out without it."""

    kind: str = Field(..., description="'whatsapp' or 'email'")
    href: str
    display: str = Field(..., description="Text shown under the link label")
    new_context: bool = Field(
        ..., description="Whether the link opens in a separate browsing context"
    )


def build_handoff_message(record: ContactRecord) -> str:
    """Plain-text message body prefilled in the messaging app."""
    return (
        f"Name: {record.name}\n"
        f"Email: {record.email}\n\n"
        f"Message:\n{record.message}"
    )


def encode_query_component(text: str) -> str:
    """Percent-encode text for a URL query component, UTF-8 based."""
    return quote(text, safe=_URI_COMPONENT_SAFE)


def build_handoff_url(record: ContactRecord, config: Optional[Settings] = None) -> str:
    """
    Build the deep link for a validated submission.

    Args:
        record: Validated, trimmed submission
        config: Settings to read the endpoint from (defaults to global settings)

    Returns:
        https://<messaging-domain>/<recipient-id>?text=<encoded message>
    """
    config = config or settings
    message = encode_query_component(build_handoff_message(record))
    return f"{config.handoff_endpoint}?text={message}"


def direct_contact_links(config: Optional[Settings] = None) -> List[DirectContactLink]:
    """Messaging and email links for the 'reach me directly' panel."""
    config = config or settings
    return [
        DirectContactLink(
            kind="whatsapp",
            href=config.handoff_endpoint,
            display=config.CONTACT_PHONE_DISPLAY,
            new_context=True,
        ),
        DirectContactLink(
            kind="email",
            href=f"mailto:{config.CONTACT_EMAIL}",
            display=config.CONTACT_EMAIL,
            new_context=False,
        ),
    ]


def open_in_new_tab(url: str) -> bool:
    """Ask the host environment to open url in a new tab.

    Returns False when no browser is available or it refused the request.
    """
    return webbrowser.open_new_tab(url)


class HandoffService:
    """Hands a deep link to the external messaging application."""

    def __init__(self, opener: Optional[Opener] = None):
        self.opener: Opener = opener or open_in_new_tab

    def hand_off(self, url: str) -> None:
        """
        Open url exactly once.

        Raises:
            HandoffError: The opener reported failure or the environment
                could not launch a browser.
        """
        try:
            opened = self.opener(url)
        except (webbrowser.Error, OSError) as e:
            log_event(
                logger,
                logging.ERROR,
                "contact_handoff_failed",
                error=str(e),
                url_length=len(url),
            )
            raise HandoffError(url, str(e)) from e

        if not opened:
            log_event(
                logger,
                logging.WARNING,
                "contact_handoff_failed",
                error="opener refused",
                url_length=len(url),
            )
            raise HandoffError(url, "the host environment refused to open the link")

        log_event(
            logger, logging.INFO, "contact_handoff_opened", url_length=len(url)
        )


# Singleton instance
handoff_service = HandoffService()
