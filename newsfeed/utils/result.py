"""Tagged success/failure values for operations whose failures are inspected as data."""
from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

T = TypeVar('T')
E = TypeVar('E', bound=BaseException)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Union[Ok[T], Err[E]]
