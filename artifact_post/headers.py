"""Header text parsing and build metadata headers.

Raw header configuration is free text, one ``Name: Value`` pair per line.
Lines are split on the first colon only, so values may contain colons
(``Authorization: Basic a:b`` keeps ``Basic a:b`` as the value).
"""

import re
from typing import Callable, Optional

import httpx

from artifact_post.types import BuildContext, HeaderLine

_LINE_BREAK = re.compile(r"\r?\n")

# RFC 7230 token, the only characters h11 accepts in a header name
_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


class HeaderError(ValueError):
    """Raised when a header name or value cannot be sent on the wire."""


def split_lines(raw: str) -> list[str]:
    return _LINE_BREAK.split(raw) if raw else []


def parse_line(line: str) -> Optional[HeaderLine]:
    """Parse one header line, or return None if it has no colon."""
    index = line.find(":")
    if index == -1:
        return None
    return HeaderLine(name=line[:index].strip(), value=line[index + 1:].strip())


def parse_headers(
    raw: str,
    on_malformed: Optional[Callable[[str], None]] = None,
) -> list[HeaderLine]:
    """Parse raw header text into HeaderLine pairs.

    Blank lines are ignored. Lines without a colon are dropped and reported
    through ``on_malformed`` when given.
    """
    headers: list[HeaderLine] = []
    for line in split_lines(raw):
        if not line.strip():
            continue
        header = parse_line(line)
        if header is None:
            if on_malformed is not None:
                on_malformed(line)
            continue
        headers.append(header)
    return headers


def check_header(name: str, value: str) -> None:
    """Raise HeaderError if the pair would be rejected by an HTTP/1.1 peer.

    Names must be non-empty RFC 7230 tokens. Values may hold tabs and
    printable characters but no other control characters, and must be
    encodable by httpx (ASCII for str values).
    """
    if not name:
        raise HeaderError("name is empty")
    for i, ch in enumerate(name):
        if not _TOKEN.fullmatch(ch):
            raise HeaderError(
                f"Unexpected char {ord(ch):#04x} at {i} in header name: {name}"
            )
    for i, ch in enumerate(value):
        code = ord(ch)
        if (code <= 0x1F and ch != "\t") or code == 0x7F:
            raise HeaderError(
                f"Unexpected char {code:#04x} at {i} in header value: {value}"
            )
    try:
        httpx.Headers([(name, value)])
    except (TypeError, UnicodeEncodeError) as exc:
        raise HeaderError(str(exc)) from exc


def build_metadata_headers(build: BuildContext, svn_revision: str) -> list[HeaderLine]:
    """Standard headers describing the build, in send order."""
    return [
        HeaderLine("SVN_REVISION", svn_revision),
        HeaderLine("Job-Name", build.project_name),
        HeaderLine("Build-Number", str(build.number)),
        HeaderLine("Build-Timestamp", str(build.timestamp_millis)),
    ]


def build_request_headers(
    configured: list[HeaderLine],
    metadata: list[HeaderLine],
) -> httpx.Headers:
    """Combine configured and metadata headers.

    Metadata is applied last; names are case-insensitive and a later value
    replaces an earlier one.
    """
    headers = httpx.Headers()
    for header in [*configured, *metadata]:
        headers[header.name] = header.value
    return headers
