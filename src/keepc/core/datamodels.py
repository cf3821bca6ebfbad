"""
Data models for saved commands.

Pydantic models for the persisted command store.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from keepc.core.exceptions import EmptyBody, EmptyName, InvalidName, InvalidText

# Separator used by the editor text format; names may not contain it.
NAME_SEPARATOR = ":::"

STORE_FORMAT_VERSION = 1


def _now() -> str:
    return datetime.now().isoformat()


def check_text(field: str, value: str) -> None:
    """Raise if value cannot be written as UTF-8."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidText(f"Command {field} is not valid UTF-8 text: {value!r}") from e


def check_name(name: str) -> None:
    """Raise if name is not usable as a command reference."""
    if not name or not name.strip():
        raise EmptyName("Command name cannot be empty")
    check_text("name", name)
    if name != name.strip():
        raise InvalidName(f"Command name cannot start or end with whitespace: {name!r}")
    if "\n" in name or "\r" in name:
        raise InvalidName(f"Command name cannot contain line breaks: {name!r}")
    if NAME_SEPARATOR in name:
        raise InvalidName(f"Command name cannot contain '{NAME_SEPARATOR}': {name!r}")
    if name.startswith(("#", "...")):
        raise InvalidName(f"Command name cannot start with '#' or '...': {name!r}")


def check_body(body: str) -> None:
    """Raise if body is blank. Whitespace inside body is kept as-is."""
    if not body or not body.strip():
        raise EmptyBody("Command body cannot be empty")
    check_text("body", body)


class CommandEntry(BaseModel):
    """A saved shell command."""

    model_config = {"extra": "forbid"}

    name: str
    body: str
    description: Optional[str] = None
    created_at: str = Field(default_factory=_now)
    modified_at: str = Field(default_factory=_now)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        try:
            check_name(value)
        except (EmptyName, InvalidName, InvalidText) as e:
            raise ValueError(str(e)) from e
        return value

    @field_validator("body")
    @classmethod
    def _validate_body(cls, value: str) -> str:
        try:
            check_body(value)
        except (EmptyBody, InvalidText) as e:
            raise ValueError(str(e)) from e
        return value

    @field_validator("description")
    @classmethod
    def _validate_description(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            try:
                check_text("description", value)
            except InvalidText as e:
                raise ValueError(str(e)) from e
        return value

    def touch(self) -> None:
        """Update the modified_at timestamp."""
        self.modified_at = _now()

    def matches_text(self) -> list[str]:
        """Fields a search pattern is checked against."""
        fields = [self.name, self.body]
        if self.description:
            fields.append(self.description)
        return fields


class StoreFile(BaseModel):
    """On-disk layout of the command store."""

    model_config = {"extra": "forbid"}

    version: int = STORE_FORMAT_VERSION
    commands: list[CommandEntry] = Field(default_factory=list)


def validate(name: str, body: str, description: Optional[str] = None) -> CommandEntry:
    """Build a CommandEntry from user input.

    Args:
        name: Reference the user types to recall the command.
        body: Shell command text, kept verbatim.
        description: Optional note shown next to the command.

    Returns:
        The new CommandEntry.

    Raises:
        EmptyName: If name is empty or whitespace-only.
        InvalidName: If name has surrounding whitespace, line breaks or ':::'.
        EmptyBody: If body is empty or whitespace-only.
        InvalidText: If any field is not valid UTF-8 text.
    """
    check_name(name)
    check_body(body)
    if description is not None and not description.strip():
        description = None
    if description is not None:
        check_text("description", description)
    return CommandEntry(name=name, body=body, description=description)
