#!/usr/bin/env python3
"""
API Domain Models

Session credentials and account records returned by the upstream API.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Credentials:
    """
    Session credentials returned by login.

    Sent back to the API as the ``args`` of every data request.
    """

    uid: str
    token: str
    app_token: str

    def to_args(self) -> dict[str, str]:
        """Upstream ``args`` representation."""
        return {"uid": self.uid, "token": self.token, "api-token": self.app_token}


@dataclass
class Account:
    """A user account. Fields beyond id and name are kept in ``raw``."""

    id: str
    name: str
    institution: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Account":
        """
        Create Account from an upstream record.

        Args:
            data: Account record from the get-accounts response

        Returns:
            Account instance
        """
        return cls(
            id=str(data.get("account-id", "")),
            name=str(data.get("account-name", "")),
            institution=data.get("institution-name"),
            raw=dict(data),
        )

    def to_dict(self) -> dict[str, Any]:
        return dict(self.raw) if self.raw else {"account-id": self.id, "account-name": self.name}
