"""Query string parsing and formatting for location search params.

Search params are held as a plain dict: a key seen once maps to a
string, a repeated key maps to a list of strings in order of appearance.
"""

from collections.abc import Mapping, Sequence
from urllib.parse import parse_qs, quote, urlencode

SearchValue = str | list[str]


def parse_query(query_string: str) -> dict[str, SearchValue]:
    """Parse a query string (without the leading ``?``).

    Blank values are kept, so ``?flag`` yields ``{"flag": ""}``.
    """
    parsed = parse_qs(query_string, keep_blank_values=True)
    return {key: values[0] if len(values) == 1 else values for key, values in parsed.items()}


def format_query(params: Mapping[str, str | Sequence[str]]) -> str:
    """Format search params back into a query string (without ``?``).

    List values repeat their key. Spaces encode as ``%20``.
    """
    return urlencode(
        [(key, value) for key, value in params.items()],
        doseq=True,
        quote_via=quote,
    )
