"""Web session with the store site, used to check the engine licence agreement."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

log = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/103.0.0.0 Safari/537.36"
)
REPUTATION_URL = "https://www.epicgames.com/id/api/reputation"
EXCHANGE_URL = "https://www.epicgames.com/id/api/exchange"
REDIRECT_URL = "https://www.epicgames.com/id/api/redirect?"
SET_SID_URL = "https://www.unrealengine.com/id/api/set-sid"
GRAPHQL_URL = "https://graphql.unrealengine.com/ue/graphql"


def _require(data: Any, key: str, kind: type, what: str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise ValueError(f"{what} is missing {key}")
    value = data[key]
    if kind is not object and (
        not isinstance(value, kind) or (kind is int and isinstance(value, bool))
    ):
        raise ValueError(f"{what}.{key} has the wrong type")
    return value


@dataclass
class RedirectResponse:
    redirect_url: str
    authorization_code: Any
    sid: str

    @classmethod
    def from_json(cls, data: Any) -> "RedirectResponse":
        return cls(
            redirect_url=_require(data, "redirectUrl", str, "redirect"),
            authorization_code=_require(data, "authorizationCode", object, "redirect"),
            sid=_require(data, "sid", str, "redirect"),
        )


@dataclass
class HasAccountAccepted:
    accepted: bool
    key: str
    locale: str
    version: int


@dataclass
class EulaError:
    message: str
    correlation_id: str
    service_response: str
    stack: Any
    path: Optional[list[str]] = None


@dataclass
class EulaResponse:
    errors: Optional[list[EulaError]]
    has_account_accepted: Optional[HasAccountAccepted]


def _parse_error(data: Any) -> EulaError:
    path = data.get("path") if isinstance(data, dict) else None
    if path is not None and (
        not isinstance(path, list) or not all(isinstance(p, str) for p in path)
    ):
        raise ValueError("error.path must be a list of strings")
    return EulaError(
        message=_require(data, "message", str, "error"),
        correlation_id=_require(data, "correlationId", str, "error"),
        service_response=_require(data, "serviceResponse", str, "error"),
        stack=_require(data, "stack", object, "error"),
        path=path,
    )


def parse_eula_response(text: str) -> EulaResponse:
    """Parse the answer to the licence query; raises ValueError on a malformed one."""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("EULA response must be a JSON object")
    errors_data = data.get("errors")
    if errors_data is not None and not isinstance(errors_data, list):
        raise ValueError("errors must be a list")
    errors = None if errors_data is None else [_parse_error(e) for e in errors_data]
    eula = _require(_require(data, "data", dict, "response"), "Eula", dict, "data")
    accepted_data = eula.get("hasAccountAccepted")
    accepted = None
    if accepted_data is not None:
        accepted = HasAccountAccepted(
            accepted=_require(accepted_data, "accepted", bool, "hasAccountAccepted"),
            key=_require(accepted_data, "key", str, "hasAccountAccepted"),
            locale=_require(accepted_data, "locale", str, "hasAccountAccepted"),
            version=_require(accepted_data, "version", int, "hasAccountAccepted"),
        )
    return EulaResponse(errors=errors, has_account_accepted=accepted)


class EpicWeb:
    """A cookie-keeping HTTP session with the store's web endpoints."""

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self.session = session if session is not None else requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT

    def start_session(self, exchange_token: str) -> None:
        """Turn an exchange code into a logged-in web session; failures are logged."""
        csrf = ""
        try:
            response = self.session.get(REPUTATION_URL)
            for cookie in response.cookies:
                if cookie.name == "XSRF-TOKEN":
                    csrf = cookie.value or ""
        except requests.RequestException as err:
            log.error("Failed to run query: %s", err)

        try:
            self.session.post(
                EXCHANGE_URL,
                json={"exchangeCode": exchange_token},
                headers={"x-xsrf-token": csrf},
            )
        except requests.RequestException as err:
            log.error("Failed to run query: %s", err)

        sid = ""
        try:
            response = self.session.get(REDIRECT_URL)
            try:
                sid = RedirectResponse.from_json(response.json()).sid
            except ValueError as err:
                log.error("Error parsing json: %s", err)
        except requests.RequestException as err:
            log.error("Failed to run query: %s", err)

        try:
            self.session.get(SET_SID_URL, params={"sid": sid})
        except requests.RequestException as err:
            log.error("Failed to run query: %s", err)

    def validate_eula(self, account_id: str) -> bool:
        """Whether the account has accepted the engine licence; False on any failure."""
        query = (
            '{    Eula {        hasAccountAccepted(id: "unreal_engine", locale: "en", '
            f'accountId: "{account_id}"'
            "){            accepted            key            locale            version"
            "        }    }}"
        )
        try:
            response = self.session.post(GRAPHQL_URL, json={"query": query})
        except requests.RequestException as err:
            log.error("Failed to run query: %s", err)
            return False
        text = response.text
        try:
            eula = parse_eula_response(text)
        except ValueError as err:
            log.error("Failed to parse EULA json: %s", err)
            log.debug("Response: %s", text)
            return False
        if eula.has_account_accepted is None:
            for error in eula.errors or ():
                log.error(
                    "Failed to query EULA status: %s with response: %s",
                    error.message,
                    error.service_response,
                )
            return False
        return eula.has_account_accepted.accepted

    def run_query(self, url: str) -> Any:
        """GET *url* and return the decoded JSON body.

        Raises requests.RequestException when the request fails and
        ValueError when the body is not JSON.
        """
        try:
            response = self.session.get(url)
        except requests.RequestException as err:
            log.error("Failed to run query: %s", err)
            raise
        return response.json()