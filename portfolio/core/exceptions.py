"""
Exceptions raised by the contact form services.
"""


class ContactError(Exception):
    """Base class for contact form failures."""


class HandoffError(ContactError):
    """The messaging deep link could not be opened by the host environment."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not open messaging hand-off: {reason}")
