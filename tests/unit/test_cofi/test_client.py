#!/usr/bin/env python3
"""Tests for the upstream API client."""

from unittest.mock import MagicMock

import pytest

from monthly_averages.cofi import CofiClient, CofiTransactionSource, Credentials
from monthly_averages.core.config import ApiConfig
from monthly_averages.core.errors import AuthError, TransportError, ValidationError
from tests.fixtures.transactions import make_transaction

BASE_URL = "https://api.example.test/api"
CREDENTIALS = Credentials(uid="u1", token="t1", app_token="app")


def make_response(body, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return CofiClient(BASE_URL + "/", app_token="app", timeout=10, session=session)


class TestLogin:
    """Test the login exchange."""

    def test_login_returns_credentials(self, client, session):
        session.request.return_value = make_response({"error": "no-error", "uid": "u1", "token": "t1"})

        creds = client.login("user@example.com", "secret")

        assert creds == CREDENTIALS
        session.request.assert_called_once_with(
            "POST",
            BASE_URL + "/login",
            json={"email": "user@example.com", "password": "secret", "args": {"api-token": "app"}},
            headers={"Accept": "application/json"},
            timeout=10,
        )

    def test_explicit_app_token_wins(self, client, session):
        session.request.return_value = make_response({"error": "no-error", "uid": "u1", "token": "t1"})

        creds = client.login("user@example.com", "secret", app_token="other")

        assert creds.app_token == "other"
        assert session.request.call_args.kwargs["json"]["args"] == {"api-token": "other"}

    @pytest.mark.parametrize(
        "user,password,message",
        [("", "secret", '"user" is required'), ("user@example.com", "", '"pass" is required')],
    )
    def test_missing_credentials_fail_before_request(self, client, session, user, password, message):
        with pytest.raises(ValidationError, match=message):
            client.login(user, password)
        session.request.assert_not_called()

    def test_missing_app_token(self, session):
        client = CofiClient(BASE_URL, session=session)

        with pytest.raises(ValidationError, match="app_token"):
            client.login("user@example.com", "secret")
        session.request.assert_not_called()

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_rejected_status_is_auth_error(self, client, session, status_code):
        session.request.return_value = make_response({}, status_code=status_code)

        with pytest.raises(AuthError):
            client.login("user@example.com", "wrong")

    def test_upstream_error_code_is_auth_error(self, client, session):
        session.request.return_value = make_response({"error": "invalid-login"})

        with pytest.raises(AuthError, match="invalid-login"):
            client.login("user@example.com", "wrong")

    def test_server_error_stays_transport_error(self, client, session):
        session.request.return_value = make_response({}, status_code=500)

        with pytest.raises(TransportError) as exc_info:
            client.login("user@example.com", "secret")
        assert not isinstance(exc_info.value, AuthError)

    def test_missing_token_in_response(self, client, session):
        session.request.return_value = make_response({"error": "no-error", "uid": "u1"})

        with pytest.raises(AuthError):
            client.login("user@example.com", "secret")


class TestFetch:
    """Test data requests."""

    def test_fetch_transactions(self, client, session):
        records = [make_transaction("a", -100, "2016-01-18T00:00:00.000Z")]
        session.request.return_value = make_response({"error": "no-error", "transactions": records})

        assert client.fetch_transactions(CREDENTIALS) == records
        args, kwargs = session.request.call_args
        assert args == ("POST", BASE_URL + "/get-all-transactions")
        assert kwargs["json"] == {"args": {"uid": "u1", "token": "t1", "api-token": "app"}}

    def test_fetch_transactions_missing_field(self, client, session):
        session.request.return_value = make_response({"error": "no-error"})
        assert client.fetch_transactions(CREDENTIALS) is None

    def test_fetch_transactions_not_a_list(self, client, session):
        session.request.return_value = make_response({"error": "no-error", "transactions": {"a": 1}})

        with pytest.raises(TransportError, match="Body is not valid"):
            client.fetch_transactions(CREDENTIALS)

    def test_fetch_accounts(self, client, session):
        session.request.return_value = make_response(
            {
                "error": "no-error",
                "accounts": [
                    {"account-id": "acc1", "account-name": "Checking", "institution-name": "Bank"},
                    {"account-id": 7, "account-name": "Card"},
                ],
            }
        )

        accounts = client.fetch_accounts(CREDENTIALS)

        assert [a.id for a in accounts] == ["acc1", "7"]
        assert accounts[0].institution == "Bank"
        assert accounts[1].institution is None
        assert session.request.call_args.args[1] == BASE_URL + "/get-accounts"

    def test_transaction_source_delegates(self, client, session):
        session.request.return_value = make_response({"error": "no-error", "transactions": []})
        source = CofiTransactionSource(client, CREDENTIALS)

        assert source.fetch_transactions() == []


class TestFromConfig:
    """Test client construction from configuration."""

    def test_from_config(self):
        config = ApiConfig(base_url="https://api.example.test/api", app_token="app", timeout=5.0)
        client = CofiClient.from_config(config)

        assert client.base_url == "https://api.example.test/api"
        assert client.app_token == "app"
        assert client.timeout == 5.0

    def test_context_manager_closes_session(self, session):
        with CofiClient(BASE_URL, app_token="app", session=session) as client:
            assert client.session is session
            session.close.assert_not_called()

        session.close.assert_called_once()

    def test_session_closed_when_request_fails(self, session):
        session.request.return_value = make_response({}, status_code=500)

        with pytest.raises(TransportError):
            with CofiClient(BASE_URL, app_token="app", session=session) as client:
                client.login("user@example.com", "secret")

        session.close.assert_called_once()

    def test_credentials_args(self):
        assert CREDENTIALS.to_args() == {"uid": "u1", "token": "t1", "api-token": "app"}
