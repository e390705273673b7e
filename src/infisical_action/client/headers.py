"""
Parsing of the extra-headers input.
"""
from functools import reduce
from typing import Dict


def _merge_header(headers: Dict[str, str], line: str) -> Dict[str, str]:
    key, _, value = line.partition(':')
    key = key.strip().lower()
    value = value.strip()
    if headers.get(key):
        value = f"{headers[key]}, {value}"
    return {**headers, key: value}


def parse_headers(raw: str) -> Dict[str, str]:
    """Parse a block of "Name: value" lines into a header map.

    Names are lower-cased. Only the first colon separates name from value.
    Repeated names are joined with ", " in the order they appear. A line
    without a colon becomes a name with an empty value.

    Example:
        >>> parse_headers("X-A: 1\\nx-a: 2")
        {'x-a': '1, 2'}
    """
    lines = (line.strip() for line in (raw or "").split("\n"))
    return reduce(_merge_header, (line for line in lines if line), {})
