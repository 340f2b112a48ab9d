# backend/services/auth_actions.py
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol, Union

import requests
from loguru import logger

from backend.config import AUTH_PROVIDER_URL, AUTH_TIMEOUT_SECONDS, DASHBOARD_PATH

# Sign-in error kinds the identity provider reports
AUTH_ERROR_KINDS = {
    "AccessDenied",
    "CallbackRouteError",
    "Configuration",
    "CredentialsSignin",
    "OAuthAccountNotLinked",
    "OAuthCallbackError",
    "OAuthSignInError",
    "SessionTokenError",
    "Verification",
}


class AuthError(Exception):
    """A sign-in failure classified by the identity provider."""

    def __init__(self, kind: str, message: Optional[str] = None):
        super().__init__(message or kind)
        self.kind = kind


class IdentityProvider(Protocol):
    def sign_in(self, provider: str, credentials: Mapping[str, Any], redirect_to: str) -> str:
        """Sign in with the named flow; returns where to send the user next."""
        ...


@dataclass(frozen=True)
class SignedIn:
    redirect_to: str


@dataclass(frozen=True)
class Handled:
    message: Optional[str] = None


@dataclass(frozen=True)
class Unhandled:
    cause: BaseException


AuthOutcome = Union[SignedIn, Handled, Unhandled]


def raise_unhandled(outcome: AuthOutcome) -> Union[SignedIn, Handled]:
    if isinstance(outcome, Unhandled):
        raise outcome.cause
    return outcome


def _redirect_target(form: Mapping[str, Any]) -> str:
    return form.get("redirectTo") or DASHBOARD_PATH


def authenticate(identity: IdentityProvider, form: Mapping[str, Any]) -> AuthOutcome:
    credentials = {key: value for key, value in form.items() if key != "redirectTo"}
    try:
        return SignedIn(identity.sign_in("credentials", credentials, _redirect_target(form)))
    except AuthError as e:
        if e.kind not in AUTH_ERROR_KINDS:
            return Unhandled(e)
        if e.kind == "CredentialsSignin":
            return Handled("Invalid credentials.")
        return Handled("Something went wrong.")
    except Exception as e:
        return Unhandled(e)


def _sign_in_with_oauth(identity: IdentityProvider, provider: str, form: Mapping[str, Any]) -> AuthOutcome:
    try:
        return SignedIn(identity.sign_in(provider, {}, _redirect_target(form)))
    except AuthError as e:
        if e.kind not in AUTH_ERROR_KINDS:
            return Unhandled(e)
        logger.info(f"{provider} sign-in failed: {e.kind}")
        return Handled()
    except Exception as e:
        return Unhandled(e)


def sign_in_with_github(identity: IdentityProvider, form: Mapping[str, Any]) -> AuthOutcome:
    return _sign_in_with_oauth(identity, "github", form)


def sign_in_with_google(identity: IdentityProvider, form: Mapping[str, Any]) -> AuthOutcome:
    return _sign_in_with_oauth(identity, "google", form)


def _json_object(response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class RemoteIdentityProvider:
    """Forwards sign-in to the identity provider's HTTP API."""

    def __init__(self, base_url: str = AUTH_PROVIDER_URL, timeout: float = AUTH_TIMEOUT_SECONDS, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def sign_in(self, provider: str, credentials: Mapping[str, Any], redirect_to: str) -> str:
        data: Dict[str, Any] = dict(credentials)
        data["redirectTo"] = redirect_to

        response = self.session.post(
            f"{self.base_url}/signin/{provider}",
            data=data,
            timeout=self.timeout,
            allow_redirects=False,
        )

        if response.is_redirect:
            return response.headers["location"]

        body = _json_object(response)

        if response.ok:
            return body.get("url") or redirect_to

        error = body.get("error") or {}
        if isinstance(error, dict) and error.get("type") in AUTH_ERROR_KINDS:
            raise AuthError(error["type"], error.get("message"))

        logger.error(f"Identity provider returned {response.status_code} for {provider} sign-in")

        response.raise_for_status()
        return redirect_to
