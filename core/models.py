# =============================================================================
# core/models.py - Response Models (the "nouns" of the adapter)
# =============================================================================
#
# The Inklink API answers with loosely-structured JSON.  Instead of passing
# raw dicts around, each endpoint gets a dataclass with exactly the fields
# the tools look at.  Fields that the reply does not carry hold UNDEFINED.
#
# WHY A SEPARATE "UNDEFINED" MARKER?
#   The text the tools return must match what the service's existing clients
#   print.  Those clients distinguish a field that is MISSING ("undefined")
#   from a field that is present but null ("null").  None alone cannot carry
#   that difference, so missing fields get their own marker.
#
# TEXT RENDERING:
#   js_string() renders any JSON value to text, js_truthy() decides whether
#   an "error" field counts as set.  Both live here so every tool renders
#   values the same way.
# =============================================================================

import math
from dataclasses import dataclass
from typing import Any


class _Undefined:
    """Marker for a field that is absent from a JSON reply."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()

# Fixed texts returned by the retrieval tools.
COMPLETED_PREFIX = "Proof was completed with a credibility level of:"
NOT_COMPLETED = "Proof has not been completed"


class ProofNotReady(LookupError):
    """The result reply has no data[0] entry to read a credibility level from."""


def js_string(value: Any) -> str:
    """Render a decoded JSON value the way a JavaScript String() call does."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return _js_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        # Array.prototype.join renders null/undefined elements as ""
        return ",".join(
            "" if item is None or item is UNDEFINED else js_string(item)
            for item in value
        )
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def _js_number(value: float) -> str:
    """Number-to-string with JavaScript's switch points for exponent notation."""
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    # repr() already gives the shortest round-trip digits; only the layout differs.
    mantissa, _, exp = repr(abs(value)).partition("e")
    int_part, _, frac = mantissa.partition(".")
    raw = int_part + frac
    lead = len(raw) - len(raw.lstrip("0"))
    digits = raw.strip("0")
    k = len(digits)
    n = len(int_part) + (int(exp) if exp else 0) - lead
    sign = "-" if value < 0 else ""
    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits
    e = n - 1
    body = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{body}e{'+' if e >= 0 else '-'}{abs(e)}"


def js_truthy(value: Any) -> bool:
    """JavaScript truthiness: empty containers are truthy, 0 / "" / null are not."""
    if value is UNDEFINED or value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return not (value == 0 or (isinstance(value, float) and math.isnan(value)))
    if isinstance(value, str):
        return value != ""
    return True


def _field(payload: Any, name: str) -> Any:
    """Read one property off a decoded JSON body.

    A null body cannot be read at all (the call fails), any other
    non-object body simply has no properties.
    """
    if payload is None:
        raise TypeError(f"Cannot read property '{name}' of null")
    if isinstance(payload, dict):
        return payload.get(name, UNDEFINED)
    return UNDEFINED


def _first_entry(data: Any) -> Any:
    """data[0] with the same indexing rules as the service's clients."""
    if data is UNDEFINED or data is None:
        raise ProofNotReady("result has no data")
    if isinstance(data, (list, str)):
        return data[0] if data else UNDEFINED
    if isinstance(data, dict):
        return data.get("0", UNDEFINED)
    return UNDEFINED


# -----------------------------------------------------------------------------
# RequestCreated: reply of POST /api/request
# -----------------------------------------------------------------------------
@dataclass
class RequestCreated:
    error: Any = UNDEFINED
    request_id: Any = UNDEFINED
    request_url: Any = UNDEFINED

    @classmethod
    def from_payload(cls, payload: Any) -> "RequestCreated":
        return cls(
            error=_field(payload, "error"),
            request_id=_field(payload, "request_id"),
            request_url=_field(payload, "request_url"),
        )

    def segments(self) -> list[str]:
        """Error text alone, or request id followed by request url."""
        if js_truthy(self.error):
            return [js_string(self.error)]
        return [js_string(self.request_id), js_string(self.request_url)]


# -----------------------------------------------------------------------------
# SessionCreated: reply of POST /api/request-session-id
# -----------------------------------------------------------------------------
@dataclass
class SessionCreated:
    error: Any = UNDEFINED
    session_id: Any = UNDEFINED
    request_url: Any = UNDEFINED

    @classmethod
    def from_payload(cls, payload: Any) -> "SessionCreated":
        return cls(
            error=_field(payload, "error"),
            session_id=_field(payload, "session_id"),
            request_url=_field(payload, "request_url"),
        )

    def segments(self) -> list[str]:
        if js_truthy(self.error):
            return [js_string(self.error)]
        return [js_string(self.session_id), js_string(self.request_url)]


# -----------------------------------------------------------------------------
# ProofResult: reply of GET /api/request-result/{id}
# -----------------------------------------------------------------------------
# Only data[0].credibility_category matters.  The lookup follows the
# service's clients: when data or data[0] is missing (no data, empty data,
# a null first entry) the walk fails, the proof is treated as not finished
# yet and ProofNotReady is raised.  A first entry that exists but is not an
# object just has no credibility_category, which renders as "undefined".
# -----------------------------------------------------------------------------
@dataclass
class ProofResult:
    credibility_category: Any = UNDEFINED

    @classmethod
    def from_payload(cls, payload: Any) -> "ProofResult":
        first = _first_entry(_field(payload, "data"))
        if first is UNDEFINED or first is None:
            raise ProofNotReady("result has no data entries")
        if isinstance(first, dict):
            return cls(credibility_category=first.get("credibility_category", UNDEFINED))
        return cls()

    def segments(self) -> list[str]:
        return [COMPLETED_PREFIX + js_string(self.credibility_category)]
