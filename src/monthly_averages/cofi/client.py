#!/usr/bin/env python3
"""
Upstream API Client

Logs a user in and fetches their accounts and transactions.

Transactions are assumed to come back ascending by transaction time; the
aggregation engine relies on this and does not sort them.
"""

import logging
from typing import Any

import requests

from ..core.config import ApiConfig
from ..core.errors import AuthError, TransportError, ValidationError
from . import request
from .models import Account, Credentials

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
ALL_TRANSACTIONS_PATH = "/get-all-transactions"
ACCOUNTS_PATH = "/get-accounts"

# Responses that mean the credentials were refused
AUTH_REJECTED_STATUS_CODES = frozenset({401, 403})


class CofiClient:
    """Client for the transactions API."""

    def __init__(
        self,
        base_url: str,
        app_token: str | None = None,
        timeout: float = request.DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API base URL, without the endpoint path
            app_token: Default application token used by login
            timeout: Request timeout in seconds
            session: Session to send requests with
        """
        self.base_url = base_url.rstrip("/")
        self.app_token = app_token
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> "CofiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @classmethod
    def from_config(cls, config: ApiConfig) -> "CofiClient":
        return cls(base_url=config.base_url, app_token=config.app_token, timeout=config.timeout)

    def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        return request.post(self.base_url + path, body=body, session=self.session, timeout=self.timeout)

    def login(self, user: str, password: str, app_token: str | None = None) -> Credentials:
        """
        Log a user in and retrieve a fresh token.

        Args:
            user: The user's email address
            password: The user's password
            app_token: Application token (default: the configured token)

        Returns:
            Credentials for subsequent requests

        Raises:
            ValidationError: If user or password is empty
            AuthError: If the API refuses the credentials
            TransportError: On any other request failure
        """
        if not user:
            raise ValidationError('"user" is required')
        if not password:
            raise ValidationError('"pass" is required')

        app_token = app_token or self.app_token
        if not app_token:
            raise ValidationError('"app_token" is required')

        logger.info("Logging in as %s", user)
        try:
            result = self._post(
                LOGIN_PATH,
                {"email": user, "password": password, "args": {"api-token": app_token}},
            )
        except TransportError as e:
            if e.status_code in AUTH_REJECTED_STATUS_CODES or e.error_code is not None:
                raise AuthError(f"Login rejected for {user}: {e}") from e
            raise

        uid = result.get("uid")
        token = result.get("token")
        if not uid or not token:
            raise AuthError(f"Login for {user} did not return a session token")

        return Credentials(uid=str(uid), token=str(token), app_token=app_token)

    def fetch_accounts(self, credentials: Credentials) -> list[Account]:
        """Retrieve the user's accounts."""
        result = self._post(ACCOUNTS_PATH, {"args": credentials.to_args()})
        accounts = result.get("accounts") or []
        logger.debug("Fetched %d accounts", len(accounts))
        return [Account.from_dict(a) for a in accounts]

    def fetch_transactions(self, credentials: Credentials) -> list[dict[str, Any]] | None:
        """
        Load all of a user's transactions.

        Returns:
            Raw transaction records, or None if the response carried none
        """
        result = self._post(ALL_TRANSACTIONS_PATH, {"args": credentials.to_args()})
        transactions = result.get("transactions")
        if transactions is not None and not isinstance(transactions, list):
            raise TransportError("Body is not valid: transactions is not a list")
        logger.debug("Fetched %d transactions", len(transactions or []))
        return transactions


class CofiTransactionSource:
    """Adapts a logged-in client to the aggregation engine's TransactionSource."""

    def __init__(self, client: CofiClient, credentials: Credentials):
        self.client = client
        self.credentials = credentials

    def fetch_transactions(self) -> list[dict[str, Any]] | None:
        return self.client.fetch_transactions(self.credentials)
