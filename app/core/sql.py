"""
SQL helpers shared by the crud modules.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Iterable, List, NamedTuple, Optional, Union

from app.core.exceptions import BadRequestError

# Values accepted in an update payload. Anything else JSON-like is passed
# through untouched as well; the builder never inspects values.
SqlValue = Union[str, int, float, bool, Decimal, None]


class PartialUpdate(NamedTuple):
    """SET clause for an UPDATE statement and the values it binds."""

    set_cols: str
    values: List[Any]


def sql_for_partial_update(
    data_to_update: Mapping,
    js_to_sql: Mapping,
    allowed: Optional[Iterable[str]] = None,
) -> PartialUpdate:
    """
    Build the SET part of an UPDATE statement from a subset of fields.

    Args:
        data_to_update: Fields to change, e.g. {"firstName": "Elaine", "age": 30}.
            Iteration order decides placeholder numbering.
        js_to_sql: Logical field name -> column name, e.g.
            {"firstName": "first_name"}. Fields missing here use their own
            name as the column.
        allowed: Optional allow-list of logical field names. When given, a
            field found neither here nor in js_to_sql is rejected instead of
            being used as a column name.

    Returns:
        PartialUpdate(set_cols='"first_name"=$1, "age"=$2', values=["Elaine", 30])

        The caller binds its row selector at position len(values) + 1.

    Raises:
        TypeError: data_to_update is None or not a mapping
        BadRequestError: data_to_update is empty, or holds a field outside
            the allow-list
    """
    if not isinstance(data_to_update, Mapping):
        raise TypeError(
            f"data_to_update must be a mapping, got {type(data_to_update).__name__}"
        )

    keys = list(data_to_update)
    if not keys:
        raise BadRequestError("No data")

    if allowed is not None:
        permitted = set(allowed) | set(js_to_sql)
        for key in keys:
            if key not in permitted:
                raise BadRequestError(f"Field not allowed: {key}")

    # {"firstName": "Aliya", "age": 32} => ['"first_name"=$1', '"age"=$2']
    cols = [
        f'"{js_to_sql.get(key, key)}"=${idx}'
        for idx, key in enumerate(keys, start=1)
    ]

    return PartialUpdate(
        set_cols=", ".join(cols),
        values=[data_to_update[key] for key in keys],
    )
