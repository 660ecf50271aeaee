"""Reading request cookies and writing ``Set-Cookie`` headers."""

from __future__ import annotations

import copy as _copy
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from corvid.utility import trim

_DIVIDER = "; "
_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class SameSitePolicy(Enum):
    """Value of the ``SameSite`` cookie attribute."""

    STRICT = "Strict"
    LAX = "Lax"
    NONE = "None"


class DuplicateCookieHeaderError(ValueError):
    """Raised when a request carries more than one ``Cookie`` header."""

    status = 400

    def __init__(self) -> None:
        super().__init__("request has more than one Cookie header")


def _as_struct_time(moment: datetime | time.struct_time) -> time.struct_time:
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(timezone.utc)
        return moment.timetuple()
    if isinstance(moment, time.struct_time):
        return moment
    raise TypeError("expires() takes a datetime or a time.struct_time")


def _http_date(moment: time.struct_time) -> str:
    return (f"{_DAYS[moment.tm_wday]}, {moment.tm_mday:02d} {_MONTHS[moment.tm_mon - 1]} "
            f"{moment.tm_year} {moment.tm_hour:02d}:{moment.tm_min:02d}:{moment.tm_sec:02d} GMT")


class Cookie:
    """A cookie with its attributes; setters return the cookie for chaining."""

    def __init__(self, key: str, value: Any = "") -> None:
        self._key = key
        self._value = str(value)
        self._domain = ""
        self._path = ""
        self._secure = False
        self._httponly = False
        self._max_age: int | None = None
        self._expires_at: time.struct_time | None = None
        self._same_site: SameSitePolicy | None = None

    def __repr__(self) -> str:
        return f"Cookie({self.dump()!r})"

    def dump(self) -> str:
        """Format the cookie as the value of a ``Set-Cookie`` header."""
        parts = [f"{self._key}={self._value or chr(34) * 2}"]
        if self._domain:
            parts.append(f"Domain={self._domain}")
        if self._path:
            parts.append(f"Path={self._path}")
        if self._secure:
            parts.append("Secure")
        if self._httponly:
            parts.append("HttpOnly")
        if self._expires_at is not None:
            parts.append(f"Expires={_http_date(self._expires_at)}")
        if self._max_age is not None:
            parts.append(f"Max-Age={self._max_age}")
        if self._same_site is not None:
            parts.append(f"SameSite={self._same_site.value}")
        return _DIVIDER.join(parts)

    def name(self) -> str:
        """Return the cookie's key."""
        return self._key

    def value(self, value: Any) -> "Cookie":
        """Set the cookie's value."""
        self._value = str(value)
        return self

    def expires(self, time: datetime | time.struct_time) -> "Cookie":
        """Set the ``Expires`` attribute; aware datetimes are converted to UTC."""
        self._expires_at = _as_struct_time(time)
        return self

    def max_age(self, seconds: int) -> "Cookie":
        """Set the ``Max-Age`` attribute."""
        self._max_age = int(seconds)
        return self

    def domain(self, name: str) -> "Cookie":
        """Set the ``Domain`` attribute."""
        self._domain = name
        return self

    def path(self, path: str) -> "Cookie":
        """Set the ``Path`` attribute."""
        self._path = path
        return self

    def secure(self) -> "Cookie":
        """Mark the cookie ``Secure``."""
        self._secure = True
        return self

    def httponly(self) -> "Cookie":
        """Mark the cookie ``HttpOnly``."""
        self._httponly = True
        return self

    def same_site(self, policy: SameSitePolicy) -> "Cookie":
        """Set the ``SameSite`` attribute."""
        self._same_site = SameSitePolicy(policy)
        return self

    def copy(self) -> "Cookie":
        """Return an independent copy of this cookie."""
        return _copy.copy(self)


def parse_cookie_header(header: str) -> dict[str, str]:
    """Parse the value of a ``Cookie`` header into a name-to-value mapping.

    Names and values are trimmed, one pair of surrounding double quotes is
    removed from a value, and the first occurrence of a name wins.
    """
    jar: dict[str, str] = {}
    pos = 0
    while pos < len(header):
        equal = header.find("=", pos)
        if equal == -1:
            break
        name = trim(header[pos:equal])
        pos = equal + 1
        if pos == len(header):
            break
        semicolon = header.find(";", pos)
        raw = header[pos:] if semicolon == -1 else header[pos:semicolon]
        value = trim(raw)
        if value and value[0] == '"' and value[-1] == '"':
            value = value[1:-1]
        jar.setdefault(name, value)
        if semicolon == -1:
            break
        pos = semicolon + 1
    return jar


@dataclass
class CookieContext:
    """Per-request cookie state: cookies received and cookies to send."""

    jar: dict[str, str] = field(default_factory=dict)
    _pending: list[Cookie] = field(default_factory=list, repr=False)

    @property
    def pending(self) -> tuple[Cookie, ...]:
        """Cookies that will be sent with the response."""
        return tuple(self._pending)

    def get_cookie(self, key: str) -> str:
        """Return the value of a received cookie, or "" if it is absent."""
        return self.jar.get(key, "")

    def set_cookie(self, key: str | Cookie, value: Any = "") -> Cookie:
        """Queue a cookie for the response and return it for further setup.

        ``key`` may be a ready-made Cookie, in which case a copy is queued.
        """
        cookie = key.copy() if isinstance(key, Cookie) else Cookie(key, value)
        self._pending.append(cookie)
        return cookie


class CookieParser:
    """Middleware that fills a CookieContext and emits ``Set-Cookie`` headers."""

    def before_handle(self, cookie_headers: str | Iterable[str] | None, ctx: CookieContext) -> None:
        """Parse the request's ``Cookie`` header values into ``ctx.jar``.

        Raises DuplicateCookieHeaderError if more than one header is given.
        """
        if cookie_headers is None:
            return
        headers = [cookie_headers] if isinstance(cookie_headers, str) else list(cookie_headers)
        if not headers:
            return
        if len(headers) > 1:
            raise DuplicateCookieHeaderError()
        for name, value in parse_cookie_header(headers[0]).items():
            ctx.jar.setdefault(name, value)

    def after_handle(self, ctx: CookieContext) -> list[tuple[str, str]]:
        """Return the ``Set-Cookie`` headers for the queued cookies, in order."""
        return [("Set-Cookie", cookie.dump()) for cookie in ctx.pending]