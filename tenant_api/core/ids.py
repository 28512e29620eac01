"""Prefixed tenant identifiers and URNs."""
import re
import secrets
import string

from tenant_api.core.exceptions import ValidationError


TENANT_ID_PREFIX = "tnntten"
ID_LENGTH = 21
URN_NAMESPACE = "infratographer"
URN_RESOURCE_TYPE = "tenant"

_ALPHABET = string.digits + string.ascii_letters
_PREFIXED_ID_RE = re.compile(r"^(?P<prefix>[a-z]{7})-(?P<body>[0-9A-Za-z]{%d})$" % ID_LENGTH)


def new_tenant_id() -> str:
    """Generate a new `tnntten-...` identifier."""
    body = "".join(secrets.choice(_ALPHABET) for _ in range(ID_LENGTH))
    return f"{TENANT_ID_PREFIX}-{body}"


def parse_tenant_id(value: str) -> str:
    """Return `value` if it is a well-formed tenant id, else raise ValidationError."""
    match = _PREFIXED_ID_RE.match(value or "")
    if match is None:
        raise ValidationError(f"invalid tenant id: {value!r}")
    if match.group("prefix") != TENANT_ID_PREFIX:
        raise ValidationError(
            f"invalid tenant id prefix {match.group('prefix')!r}, expected {TENANT_ID_PREFIX!r}"
        )
    return value


def tenant_urn(tenant_id: str) -> str:
    return f"urn:{URN_NAMESPACE}:{URN_RESOURCE_TYPE}:{tenant_id}"
