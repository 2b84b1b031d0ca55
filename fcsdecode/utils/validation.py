"""
Validation of FCS TEXT segment keywords.
"""

from typing import Dict, Iterator, List

from fcsdecode.constants import INDEXED_KEYWORDS, NON_INDEXED_KEYWORDS
from fcsdecode.errors import InvalidDataError, MissingKeywordError


def parse_unsigned(value: str) -> int:
    """
    Parse a decimal string holding an unsigned integer.

    Unlike ``int()``, signs, underscores and surrounding whitespace are
    rejected.

    Args:
        value: Text to parse

    Returns:
        The parsed integer

    Raises:
        ValueError: If the text is not a plain run of ASCII digits
    """
    if not value or not value.isascii() or not value.isdigit():
        raise ValueError(f"not an unsigned integer: {value!r}")
    return int(value)


def indexed_keyword(template: str, index: int) -> str:
    """Substitute a parameter index into a ``$PnX`` template."""
    return template.replace("n", str(index), 1)


def required_keywords(n_params: int) -> Iterator[str]:
    """
    Yield every keyword a valid TEXT segment must contain.

    Plain keywords come first, then the indexed ones for each parameter
    in ascending order.

    Args:
        n_params: Parameter count ($PAR)
    """
    yield from NON_INDEXED_KEYWORDS
    for index in range(1, n_params + 1):
        for template in INDEXED_KEYWORDS:
            yield indexed_keyword(template, index)


def parameter_count(text: Dict[str, str]) -> int:
    """
    Get $PAR as an int.

    Raises:
        MissingKeywordError: If $PAR is absent or not an unsigned integer
    """
    try:
        return parse_unsigned(text["$PAR"])
    except (KeyError, ValueError) as err:
        raise MissingKeywordError("$PAR") from err


def validate_text(text: Dict[str, str]) -> None:
    """
    Check that all required keywords are present.

    Args:
        text: Keyword/value pairs from the TEXT segment

    Raises:
        MissingKeywordError: Naming the first absent keyword
    """
    n_params = parameter_count(text)

    for keyword in required_keywords(n_params):
        if keyword not in text:
            raise MissingKeywordError(keyword)


def missing_keywords(text: Dict[str, str]) -> List[str]:
    """
    List every absent required keyword instead of stopping at the first.

    When $PAR itself is unusable only the plain keywords can be checked.
    """
    try:
        n_params = parameter_count(text)
    except MissingKeywordError:
        return ["$PAR"] + [k for k in NON_INDEXED_KEYWORDS if k != "$PAR" and k not in text]

    return [k for k in required_keywords(n_params) if k not in text]


def require_unsigned(text: Dict[str, str], keyword: str, strip: bool = False) -> int:
    """
    Fetch a keyword for the DATA stage and parse it as an unsigned integer.

    Args:
        text: Metadata dictionary
        keyword: Keyword to fetch
        strip: Trim surrounding whitespace before parsing

    Raises:
        InvalidDataError: If the keyword is missing or malformed
    """
    if keyword not in text:
        raise InvalidDataError(f"Missing {keyword} in metadata")

    value = text[keyword].strip() if strip else text[keyword]
    try:
        return parse_unsigned(value)
    except ValueError as err:
        raise InvalidDataError(f"Invalid {keyword} value: {text[keyword]!r}") from err
