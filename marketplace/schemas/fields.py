"""Shared field types for request schemas."""

from typing import Annotated

from pydantic import BeforeValidator, Field

# Range of a 32-bit INTEGER column
MAX_DB_INT = 2_147_483_647
MIN_DB_INT = -MAX_DB_INT - 1


def _reject_bool(value):
    # bool is an int subclass; `true` must not become quantity 1
    if isinstance(value, bool):
        raise ValueError("expected an integer, got a boolean")
    return value


DbInt = Annotated[int, Field(ge=MIN_DB_INT, le=MAX_DB_INT), BeforeValidator(_reject_bool)]
