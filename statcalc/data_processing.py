"""
Turns free-text input boxes into numeric samples.
"""

# Values may be separated by commas, whitespace or newlines, so data pasted
# from a spreadsheet column or typed as "1, 2, 3" parse the same way. Unlike a
# lenient parser, unreadable tokens are reported rather than dropped.

import re

import numpy as np
import pandas as pd

from .exceptions import DomainError, MalformedInputError

_SEPARATORS = re.compile(r"[,\s]+")


def parse_data_input(text, name="data"):
    """Parse comma- or whitespace-separated numbers.

    Args:
        text: Raw text from an input box.
        name: Label used in error messages.

    Returns:
        numpy.ndarray: Finite float values in input order; empty for blank
        text.

    Raises:
        MalformedInputError: If any token is not a finite number. The error's
            ``tokens`` attribute lists the offending tokens.
    """
    tokens = [tok for tok in _SEPARATORS.split(str(text or "").strip()) if tok]
    if not tokens:
        return np.array([], dtype=float)

    values = pd.to_numeric(pd.Series(tokens, dtype=object), errors="coerce").to_numpy(
        dtype=float
    )
    bad = [tok for tok, v in zip(tokens, values) if not np.isfinite(v)]
    if bad:
        raise MalformedInputError(
            f"{name} contains values that are not finite numbers: {', '.join(bad)}",
            tokens=bad,
        )
    return values


def parse_groups(texts, min_groups=0):
    """Parse several input boxes, skipping the ones left empty.

    Args:
        texts: Iterable of raw text boxes, one per group.
        min_groups: Minimum number of non-empty groups expected.

    Returns:
        list[numpy.ndarray]: One array per non-empty box, in input order.
    """
    groups = []
    for i, text in enumerate(texts, start=1):
        values = parse_data_input(text, name=f"Group {i}")
        if values.size:
            groups.append(values)
    if len(groups) < min_groups:
        raise DomainError(
            f"Please enter at least {min_groups} groups with data, got {len(groups)}"
        )
    return groups
