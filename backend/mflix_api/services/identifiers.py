"""
Mflix API - Resource Identifier Validation
===========================================

What:  Predicates and converters for path identifiers.
How:   A valid identifier is a string accepted by `bson.ObjectId`: exactly 24
       hexadecimal characters. Pure functions, no I/O.
Who:   Resource services call `require_valid_ids()` before building any query.
"""

import re
from typing import Any, List, Optional, Sequence, Tuple

from bson import ObjectId

from mflix_api.exceptions import ValidationError


OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


def is_valid_id(value: Any) -> bool:
    """
    True if `value` is a well-formed ObjectId string.

    ObjectId.is_valid alone is too lenient for path segments: it accepts
    12-byte `bytes`, ObjectId instances, and 24-char strings padded with
    whitespace (bytes.fromhex skips it). The pattern pins the alphabet.
    """
    return (
        isinstance(value, str)
        and OBJECT_ID_PATTERN.fullmatch(value) is not None
        and ObjectId.is_valid(value)
    )


def require_valid_ids(
    identifiers: Sequence[Tuple[str, Optional[str]]],
) -> List[Optional[ObjectId]]:
    """
    Validate every identifier of a route, in path order, before any query.

    Args:
        identifiers: (resource label, raw value) pairs, e.g.
            [("movie", movie_id), ("comment", comment_id)]. A None value
            means the route has no such segment and is passed through.

    Returns:
        The converted ObjectIds, aligned with the input (None preserved).

    Raises:
        ValidationError: For the first identifier that is malformed.
    """
    for resource, value in identifiers:
        if value is not None and not is_valid_id(value):
            raise ValidationError.invalid_id(resource, field=f"{resource}_id")
    return [ObjectId(value) if value is not None else None for _, value in identifiers]
