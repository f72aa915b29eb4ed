"""Built-in scalar predicates.

Each predicate takes the datum (and, for a few, an auxiliary argument) and
returns a bool. Ordinary mismatches return False; only a malformed auxiliary
argument raises.
"""

import ipaddress
import math
import re
from collections.abc import Callable, Mapping
from datetime import date, datetime, time, timezone
from typing import Any
from urllib.parse import urlsplit

from email_validator import EmailNotValidError, validate_email

from .ruleset import UNDEFINED

Predicate = Callable[..., bool]

_ALPHA_RE = re.compile(r"^[a-zA-Z]+$")
_NUMERIC_RE = re.compile(r"^-?[0-9]+$")
_ALPHANUMERIC_RE = re.compile(r"^[a-zA-Z0-9]+$")
_INT_RE = re.compile(r"^-?(?:0|[1-9][0-9]*)$")
_DECIMAL_RE = re.compile(r"^-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")
_URLISH_RE = re.compile(r"^\s*([^/]+\.)+.+\s*$")
_HOSTNAME_RE = re.compile(
    r"^(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,}$", re.IGNORECASE
)
_CREDITCARD_RE = re.compile(
    r"^(?:4[0-9]{12}(?:[0-9]{3})?"
    r"|5[1-5][0-9]{14}"
    r"|6(?:011|5[0-9][0-9])[0-9]{12}"
    r"|3[47][0-9]{13}"
    r"|3(?:0[0-5]|[68][0-9])[0-9]{11}"
    r"|(?:2131|1800|35[0-9]{3})[0-9]{11})$"
)
_UUID_RES = {
    None: re.compile(r"^[0-9A-F]{8}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{12}$", re.IGNORECASE),
    3: re.compile(r"^[0-9A-F]{8}-[0-9A-F]{4}-3[0-9A-F]{3}-[0-9A-F]{4}-[0-9A-F]{12}$", re.IGNORECASE),
    4: re.compile(r"^[0-9A-F]{8}-[0-9A-F]{4}-4[0-9A-F]{3}-[89AB][0-9A-F]{3}-[0-9A-F]{12}$", re.IGNORECASE),
    5: re.compile(r"^[0-9A-F]{8}-[0-9A-F]{4}-5[0-9A-F]{3}-[89AB][0-9A-F]{3}-[0-9A-F]{12}$", re.IGNORECASE),
}
_URL_SCHEMES = {"http", "https", "ftp"}
_URL_MAX_LENGTH = 2083


def _is_real_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _matches(regex: re.Pattern, x: Any) -> bool:
    return isinstance(x, str) and regex.fullmatch(x) is not None


# Presence

def is_empty(x: Any) -> bool:
    return x == ""


def is_undefined(x: Any) -> bool:
    return x is UNDEFINED


def is_null(x: Any) -> bool:
    return x is None


# Primitive kinds

def is_string(x: Any) -> bool:
    return isinstance(x, str)


def is_number(x: Any) -> bool:
    return _is_real_number(x)


def is_finite(x: Any) -> bool:
    return _is_real_number(x) and math.isfinite(x)


def is_boolean(x: Any) -> bool:
    return isinstance(x, bool)


def is_array(x: Any) -> bool:
    return isinstance(x, (list, tuple))


def is_object(x: Any) -> bool:
    return isinstance(x, Mapping)


def is_date(x: Any) -> bool:
    return isinstance(x, date)


# String formats

def is_alpha(x: Any) -> bool:
    return _matches(_ALPHA_RE, x)


def is_numeric(x: Any) -> bool:
    return _matches(_NUMERIC_RE, x)


def is_alphanumeric(x: Any) -> bool:
    return _matches(_ALPHANUMERIC_RE, x)


def is_email(x: Any) -> bool:
    if not isinstance(x, str):
        return False
    try:
        validate_email(x, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_url(x: Any) -> bool:
    """http(s)/ftp URL with a dotted hostname, ``localhost`` or an IP host."""
    if not isinstance(x, str) or not x or len(x) > _URL_MAX_LENGTH:
        return False
    if any(c.isspace() for c in x):
        return False
    try:
        parts = urlsplit(x)
        port = parts.port
        host = parts.hostname
    except ValueError:
        return False
    if parts.scheme.lower() not in _URL_SCHEMES or not host:
        return False
    if port is not None and not 0 < port <= 65535:
        return False
    if host == "localhost" or _HOSTNAME_RE.fullmatch(host):
        return True
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def is_urlish(x: Any) -> bool:
    return _matches(_URLISH_RE, x)


def is_ip(x: Any) -> bool:
    if not isinstance(x, str):
        return False
    try:
        ipaddress.ip_address(x)
    except ValueError:
        return False
    return True


def is_creditcard(x: Any) -> bool:
    """Known issuer prefix and length, then the Luhn checksum."""
    if not isinstance(x, str):
        return False
    digits = re.sub(r"[\s-]", "", x)
    if not _CREDITCARD_RE.fullmatch(digits):
        return False

    total = 0
    for i, ch in enumerate(reversed(digits)):
        n = int(ch)
        if i % 2 == 1:
            n *= 2
            if n > 9:
                n -= 9
        total += n
    return total % 10 == 0


def is_uuid(x: Any, version: Any = None) -> bool:
    if version is not None:
        try:
            version = int(version)
        except (TypeError, ValueError):
            raise ValueError(f"Unsupported UUID version: {version!r}") from None
    if version not in _UUID_RES:
        raise ValueError(f"Unsupported UUID version: {version!r}")
    return _matches(_UUID_RES[version], x)


# Numeric formats

def is_int(x: Any) -> bool:
    if isinstance(x, bool):
        return False
    if isinstance(x, int):
        return True
    if isinstance(x, float):
        return math.isfinite(x) and x.is_integer()
    return _matches(_INT_RE, x)


def is_decimal(x: Any) -> bool:
    if _is_real_number(x):
        return math.isfinite(x)
    if not isinstance(x, str):
        return False
    return _DECIMAL_RE.fullmatch(x) is not None


# Truthiness

def is_truthy(x: Any) -> bool:
    return bool(x)


def is_falsey(x: Any) -> bool:
    return not x


# Date ordering

def _to_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            moment = datetime.fromisoformat(value)
        except ValueError:
            return None
    else:
        return None
    # Naive values are read as UTC so they compare with aware ones.
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _reference_datetime(reference: Any) -> datetime:
    if reference is None:
        return datetime.now(timezone.utc)
    moment = _to_datetime(reference)
    if moment is None:
        raise ValueError(f"Invalid comparison date: {reference!r}")
    return moment


def is_after(x: Any, reference: Any = None) -> bool:
    bound = _reference_datetime(reference)
    moment = _to_datetime(x)
    return moment is not None and moment > bound


def is_before(x: Any, reference: Any = None) -> bool:
    bound = _reference_datetime(reference)
    moment = _to_datetime(x)
    return moment is not None and moment < bound


def pattern_predicate(regex: re.Pattern) -> Predicate:
    """Predicate for an inline pattern rule: a string that the pattern matches."""
    def check(x: Any) -> bool:
        return isinstance(x, str) and regex.search(x) is not None
    return check


BUILTIN_PREDICATES: dict[str, Predicate] = {
    "empty": is_empty,
    "undefined": is_undefined,
    "null": is_null,

    "string": is_string,
    "alpha": is_alpha,
    "numeric": is_numeric,
    "alphanumeric": is_alphanumeric,
    "email": is_email,
    "url": is_url,
    "urlish": is_urlish,
    "ip": is_ip,
    "creditcard": is_creditcard,
    "uuid": is_uuid,

    "int": is_int,
    "integer": is_int,
    "number": is_number,
    "finite": is_finite,

    "decimal": is_decimal,
    "float": is_decimal,

    "falsey": is_falsey,
    "truthy": is_truthy,

    "boolean": is_boolean,
    "array": is_array,

    "date": is_date,
    "after": is_after,
    "before": is_before,
}
