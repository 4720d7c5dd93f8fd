# assistant/models/domain/email_domain.py
"""
Email Domain Models
Domain model for already-fetched inbound messages.
Used by the timezone service to get headers, body and participants.
"""

from collections.abc import Mapping
from email.utils import getaddresses
from typing import Any


class InboundEmail:
    """Domain model for an inbound message with decoded plain-text body."""

    def __init__(self, headers: Mapping[str, str] | list[dict[str, str]], body: str = ""):
        # Accept Gmail-style [{"name": ..., "value": ...}] header lists too
        if isinstance(headers, list):
            headers = {h["name"]: h["value"] for h in headers if "name" in h}
        self.raw_headers = dict(headers or {})
        self.body = body or ""
        self._parse_headers()

    def _parse_headers(self):
        """Parse the addressing headers."""
        self.headers = {name.lower(): value for name, value in self.raw_headers.items()}

        self.subject = self.headers.get("subject", "(No Subject)")
        self.sender = self._parse_email_address(self.headers.get("from", ""))
        self.recipients = self._parse_email_addresses(self.headers.get("to", ""))
        self.cc = self._parse_email_addresses(self.headers.get("cc", ""))
        self.date = self.headers.get("date", "")
        self.message_id = self.headers.get("message-id", "")

    def _parse_email_address(self, address_str: str) -> dict[str, str]:
        """Parse email address string into name and email components."""
        addresses = self._parse_email_addresses(address_str)
        return addresses[0] if addresses else {"name": "", "email": ""}

    def _parse_email_addresses(self, addresses_str: str) -> list[dict[str, str]]:
        """Parse comma-separated email addresses, honouring quoted display names."""
        if not addresses_str:
            return []

        # Handles "John Doe <john@example.com>", bare addresses and "Doe, John" <...>
        return [
            {"name": name.strip(), "email": email.strip().lower()}
            for name, email in getaddresses([addresses_str])
            if email.strip()
        ]

    def get_header(self, name: str, default: str | None = None) -> str | None:
        return self.headers.get(name.lower(), default)

    def participants(self) -> list[str]:
        """Sender, then To, then Cc addresses, each once."""
        addresses = [self.sender, *self.recipients, *self.cc]
        return list(dict.fromkeys(a["email"] for a in addresses if a["email"]))

    def participant_names(self) -> dict[str, str]:
        names = {}
        for address in [self.sender, *self.recipients, *self.cc]:
            if address["email"] and address["name"]:
                names.setdefault(address["email"], address["name"])
        return names

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject": self.subject,
            "sender": self.sender,
            "recipients": self.recipients,
            "cc": self.cc,
            "date": self.date,
            "message_id": self.message_id,
            "participants": self.participants(),
        }
