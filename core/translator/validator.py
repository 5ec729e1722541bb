"""Required parameter checks performed before a request is built."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

__all__: list[str] = ["get_missing_params", "is_empty"]


def is_empty(value: Any) -> bool:
    """Check whether a parameter value counts as not supplied.

    None, empty strings and empty containers are empty. False and 0 are real values.
    """
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict)):
        return len(value) == 0
    return False


def get_missing_params(params: Mapping[str, Any], required: Sequence[str]) -> list[str]:
    """Return the required parameter names that are absent or empty.

    Args:
        params (Mapping[str, Any]): Parameters supplied for one call.
        required (Sequence[str]): Required names in declaration order.

    Returns:
        list[str]: Missing names, in the order of ``required``. Empty when all are present.
    """
    return [name for name in required if is_empty(params.get(name))]
