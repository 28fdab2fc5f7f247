"""
Input Shapes

Data-quality analysis accepts three shapes:
- Text: plain free text (chat message, description)
- Markup: HTML fragment or page
- Record: key/value mapping (imported CSV row, API payload)

Raw values are coerced: str -> Markup, Mapping -> Record. Anything else is a
caller bug and raises InvalidInputError.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Union


class AqarError(Exception):
    """Base error for the listing engine."""
    pass


class InvalidInputError(AqarError, TypeError):
    """Input is neither text nor a key/value mapping."""
    pass


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class Markup:
    content: str


@dataclass(frozen=True)
class Record:
    """Key/value record. Keys keep insertion order."""
    fields: Dict[str, Any] = field(default_factory=dict)

    def as_text(self) -> str:
        """Render as "key: value" lines so text detectors can scan the values."""
        return "\n".join(f"{key}: {value}" for key, value in self.fields.items() if value is not None)


QualityInput = Union[Text, Markup, Record]


def coerce_input(data: Any) -> QualityInput:
    """
    Resolve a raw value to one of the input shapes.

    Raises:
        InvalidInputError: data is None or of an unsupported type
    """
    if isinstance(data, (Text, Markup, Record)):
        if isinstance(data, Record):
            if not isinstance(data.fields, Mapping):
                raise InvalidInputError("Record fields must be a mapping")
        elif not isinstance(data.content, str):
            raise InvalidInputError(f"{type(data).__name__} content must be a string")
        return data
    if isinstance(data, str):
        return Markup(data)
    if isinstance(data, Mapping):
        return Record(dict(data))
    raise InvalidInputError(
        f"Expected text or a key/value mapping, got {type(data).__name__}"
    )
