from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from catalog_api.core.exceptions import APIException

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a catalog operation: either a value or an API error.

    Service methods return a Result instead of raising so that every
    operation is a total function from request to response.
    """

    value: Optional[T] = None
    error: Optional[APIException] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: APIException) -> "Result[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """
        Return the value or raise the carried error.

        Raises:
            APIException: If the result is a failure
        """
        if self.error is not None:
            raise self.error
        return self.value
