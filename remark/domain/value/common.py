"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for all value objects.

    Value objects are immutable and compared by value. They are built through
    their ``parse`` constructors, which turn raw request input into a valid
    value or raise a domain ``ValidationError``.
    """

    model_config = ConfigDict(frozen=True)
