"""JAR manifest and OSGi header parsing."""

import re
from dataclasses import dataclass, field

_LINE_SPLIT = re.compile(r"\r\n|\r|\n")


@dataclass
class HeaderClause:
    """One comma-separated clause of an OSGi header.

    ``a;b;version="1.0";uses:="c,d"`` has names ``a`` and ``b`` and
    parameters ``version`` and ``uses:``.
    """
    names: list[str] = field(default_factory=list)
    parameters: dict[str, str] = field(default_factory=dict)


def parse_manifest(data: bytes) -> dict[str, str]:
    """Main section headers of a MANIFEST.MF.

    Continuation lines (starting with a single space) are joined to the
    previous line. Parsing stops at the first blank line.
    """
    headers: dict[str, str] = {}
    current: str | None = None

    for line in _LINE_SPLIT.split(data.decode("utf-8")):
        if not line:
            if headers:
                break
            continue
        if line.startswith(" ") and current is not None:
            headers[current] += line[1:]
            continue
        key, sep, value = line.partition(":")
        if not sep:
            continue
        current = key.strip()
        headers[current] = value[1:] if value.startswith(" ") else value

    return headers


def _split_unquoted(value: str, separator: str) -> list[str]:
    parts = []
    buf = []
    quoted = False
    for char in value:
        if char == '"':
            quoted = not quoted
        if char == separator and not quoted:
            parts.append("".join(buf))
            buf = []
        else:
            buf.append(char)
    parts.append("".join(buf))
    return parts


def parse_header_clauses(value: str | None) -> list[HeaderClause]:
    """Split an OSGi header such as Export-Package into clauses."""
    if not value:
        return []

    clauses = []
    for raw_clause in _split_unquoted(value, ","):
        if not raw_clause.strip():
            continue
        clause = HeaderClause()
        for segment in _split_unquoted(raw_clause, ";"):
            segment = segment.strip()
            if not segment:
                continue
            key, sep, param = segment.partition("=")
            if sep:
                clause.parameters[key.strip()] = param.strip().strip('"')
            else:
                clause.names.append(segment)
        clauses.append(clause)
    return clauses
