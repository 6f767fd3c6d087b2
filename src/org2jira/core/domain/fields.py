"""
Field Accessor - Ordered traversal of nested issue records.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Union

from ..exceptions import MissingFieldError


FieldToken = Union[str, int]


def get_field(record: Any, *path: FieldToken) -> Any:
    """
    Walk ``record`` through each token of ``path`` and return the leaf.

    String tokens look up mapping keys, integer tokens index sequences.

    Args:
        record: Nested mapping as returned by the JIRA API
        *path: Tokens to follow, outermost first

    Returns:
        The value found at the end of the path (which may be None if the
        record stores an explicit null)

    Raises:
        MissingFieldError: If any token cannot be resolved
    """
    current = record
    walked: list[FieldToken] = []

    for token in path:
        if isinstance(current, Mapping):
            if token not in current:
                raise MissingFieldError(token, tuple(walked))
            current = current[token]
        elif (
            isinstance(current, Sequence)
            and not isinstance(current, (str, bytes))
            and isinstance(token, int)
            and not isinstance(token, bool)
        ):
            if not -len(current) <= token < len(current):
                raise MissingFieldError(token, tuple(walked))
            current = current[token]
        else:
            raise MissingFieldError(token, tuple(walked))
        walked.append(token)

    return current
