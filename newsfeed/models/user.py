from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from newsfeed.exceptions import FormatError
from newsfeed.utils.dt import from_epoch_millis, parse_iso8601, to_iso8601
from newsfeed.utils.result import Err, Ok, Result

REQUIRED_FIELDS = ('id', 'name', 'created_at')


def _type_name(value: Any) -> str:
    return type(value).__name__


def _decode_created_at(created_at: Any) -> datetime:
    if isinstance(created_at, datetime):
        return created_at
    # bool is an int subclass but never a timestamp
    if isinstance(created_at, int) and not isinstance(created_at, bool):
        return from_epoch_millis(created_at)
    if isinstance(created_at, str):
        try:
            return parse_iso8601(created_at)
        except ValueError as e:
            raise ValueError(f'Invalid ISO date format: {created_at}. Error: {e}') from e
    raise ValueError(
        f'created_at must be either epoch milliseconds (int) or ISO string, got: {_type_name(created_at)}'
    )


class User(BaseModel):
    """A user record whose ``created_at`` may arrive as epoch millis or ISO-8601."""
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    created_at: datetime

    @model_validator(mode='before')
    @classmethod
    def check_wire_shape(cls, data: Any) -> dict[str, Any]:
        if not isinstance(data, dict):
            raise ValueError(f'User data must be an object, got: {_type_name(data)}')

        for field in REQUIRED_FIELDS:
            if data.get(field) is None:
                raise ValueError(f'User {field} is required and cannot be null')

        user_id = data['id']
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise ValueError(f'User id must be an integer, got: {_type_name(user_id)}')

        name = data['name']
        if not isinstance(name, str):
            raise ValueError(f'User name must be a string, got: {_type_name(name)}')

        return {'id': user_id, 'name': name, 'created_at': _decode_created_at(data['created_at'])}

    def to_json(self) -> dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'created_at': to_iso8601(self.created_at)}


def _format_error(error: ValidationError) -> FormatError:
    details = error.errors()
    if details:
        cause = details[0].get('ctx', {}).get('error')
        if cause is not None:
            return FormatError(str(cause))
        return FormatError(details[0]['msg'])
    return FormatError(str(error))


def decode_user(data: Any) -> Result[User, FormatError]:
    """
    Decode a user payload without raising.

    :param data: Decoded JSON object
    :return: Ok(User) on success, Err(FormatError) naming the offending field or value otherwise
    """
    try:
        return Ok(User.model_validate(data))
    except ValidationError as e:
        return Err(_format_error(e))


def parse_user(data: Any) -> User:
    """
    Decode a user payload.

    :param data: Decoded JSON object
    :return: Hydrated user
    :raises FormatError: If a field is missing, null, or of the wrong type
    """
    return decode_user(data).unwrap()
