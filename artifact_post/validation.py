"""Configuration-time checks for the URL and header fields.

These run when a user edits the configuration, not during an upload.
Each check returns a FormValidation instead of raising, so a host UI can
show the message next to the offending field.
"""

import re
from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import urlsplit

import httpx

from artifact_post.headers import HeaderError, check_header, parse_line, split_lines

# RFC 3986 unreserved, reserved and percent characters
_URI_CHAR = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class ValidationKind(StrEnum):
    OK = "ok"
    ERROR = "error"


@dataclass(frozen=True)
class FormValidation:
    kind: ValidationKind
    message: str = ""

    @classmethod
    def ok(cls) -> "FormValidation":
        return cls(ValidationKind.OK)

    @classmethod
    def error(cls, message: str) -> "FormValidation":
        return cls(ValidationKind.ERROR, message)

    @property
    def is_ok(self) -> bool:
        return self.kind == ValidationKind.OK


def validate_url(value: str) -> FormValidation:
    """Check the upload URL. An empty value means "use the default"."""
    if not value:
        return FormValidation.ok()

    if not value.startswith("http://") and not value.startswith("https://"):
        return FormValidation.error("URL must start with http:// or https://")

    error = _check_uri_syntax(value)
    if error:
        return FormValidation.error(error)

    try:
        parts = urlsplit(value)
        # Accessing .port validates it
        parts.port
        httpx.URL(value)
    except (ValueError, httpx.InvalidURL) as exc:
        return FormValidation.error(str(exc))

    return FormValidation.ok()


def _check_uri_syntax(value: str) -> str:
    """Return a parser-style message for the first illegal character, or "".

    Printable non-ASCII characters are let through as IRI text.
    """
    for i, ch in enumerate(value):
        if _URI_CHAR.fullmatch(ch):
            continue
        if ord(ch) > 0x7F and ch.isprintable() and not ch.isspace():
            continue
        return f"Illegal character at index {i}: {value}"

    match = _BAD_ESCAPE.search(value)
    if match:
        return f"Malformed escape pair at index {match.start()}: {value}"

    return ""


def validate_headers(value: str) -> FormValidation:
    """Check header text, stopping at the first bad line."""
    if not value:
        return FormValidation.ok()

    for line in split_lines(value):
        if not line.strip():
            continue

        header = parse_line(line)
        if header is None:
            return FormValidation.error(f"Unexpected header: {line}")

        try:
            check_header(header.name, header.value)
        except HeaderError as exc:
            return FormValidation.error(str(exc))

    return FormValidation.ok()
