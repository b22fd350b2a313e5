### Description ###
# Warehouse API - Clean J Shipping Backend
# - Credential Resolution -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Credential Resolution

Turns request headers into exactly one typed credential, or a MissingCredential
rejection, using the precedence table of the route family being called.

Families and the order their headers are checked in:

    staff / customer / account   Authorization: Bearer <session token>
    warehouse                    X-API-Key, then Authorization: Bearer <session token>
    courier                      X-KCD-API-Key, then Authorization: Bearer <raw API key>

On courier routes a bearer value is treated as a raw API key and looked up in
the key store; it is never verified as a session token.
"""

from dataclasses import dataclass
from typing import Mapping, Union

from warehouse_api.config import get_api_settings

settings = get_api_settings()

AUTHORIZATION_HEADER = "Authorization"


@dataclass(frozen=True)
class SessionCredential:
    """Signed session token from a staff or customer login"""

    value: str
    header: str = AUTHORIZATION_HEADER


@dataclass(frozen=True)
class WarehouseKeyCredential:
    """Warehouse integration API key"""

    value: str
    header: str = AUTHORIZATION_HEADER


@dataclass(frozen=True)
class CourierKeyCredential:
    """Courier integration API key (KCD Logistics, Tasoko)"""

    value: str
    header: str = AUTHORIZATION_HEADER


Credential = Union[SessionCredential, WarehouseKeyCredential, CourierKeyCredential]


@dataclass(frozen=True)
class MissingCredential:
    """No header accepted by the route family carried a usable value"""

    family: str
    expected: tuple[str, ...]

    @property
    def detail(self) -> str:
        return f"Authentication required. Provide one of: {', '.join(self.expected)}"


@dataclass(frozen=True)
class HeaderRule:
    """One row of a precedence table: which header produces which credential"""

    header: str
    credential: type
    bearer: bool = False

    @property
    def label(self) -> str:
        return f"{self.header}: Bearer <token>" if self.bearer else self.header

    def extract(self, headers: Mapping[str, str]) -> str | None:
        raw = headers.get(self.header.lower())
        if raw is None:
            return None
        raw = raw.strip()
        if self.bearer:
            scheme, _, token = raw.partition(" ")
            if scheme.lower() != "bearer":
                return None
            raw = token.strip()
        return raw or None


@dataclass(frozen=True)
class RouteFamily:
    """A group of routes sharing one credential precedence table"""

    name: str
    rules: tuple[HeaderRule, ...]

    @property
    def accepted(self) -> frozenset[type]:
        return frozenset(rule.credential for rule in self.rules)

    @property
    def expected_headers(self) -> tuple[str, ...]:
        return tuple(rule.label for rule in self.rules)


def _session_bearer() -> HeaderRule:
    return HeaderRule(AUTHORIZATION_HEADER, SessionCredential, bearer=True)


STAFF = RouteFamily("staff", (_session_bearer(),))
CUSTOMER = RouteFamily("customer", (_session_bearer(),))
ACCOUNT = RouteFamily("account", (_session_bearer(),))
WAREHOUSE = RouteFamily(
    "warehouse",
    (
        HeaderRule(settings.api_key_header, WarehouseKeyCredential),
        _session_bearer(),
    ),
)
COURIER = RouteFamily(
    "courier",
    (
        HeaderRule(settings.courier_key_header, CourierKeyCredential),
        HeaderRule(AUTHORIZATION_HEADER, CourierKeyCredential, bearer=True),
    ),
)


def resolve_credential(
    headers: Mapping[str, str], family: RouteFamily
) -> Credential | MissingCredential:
    """
    Pick the credential a request presents to a route family.

    Rules are tried in table order; the first header with a usable value wins.
    Headers that are absent, blank, or use another auth scheme are skipped.

    Args:
        headers: Request headers (any mapping; names are matched case-insensitively)
        family: Route family declaring the accepted headers

    Returns:
        A typed credential, or MissingCredential
    """
    lowered = {name.lower(): value for name, value in headers.items()}

    for rule in family.rules:
        value = rule.extract(lowered)
        if value is not None:
            return rule.credential(value=value, header=rule.header)

    return MissingCredential(family=family.name, expected=family.expected_headers)
