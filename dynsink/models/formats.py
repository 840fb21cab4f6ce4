"""Output format descriptors."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class OutputFormatSpec(BaseModel):
    """A recipe for constructing an output format: a name plus arguments.

    A spec is resolved into a fresh serializer for every destination, since
    serializers carry per-stream state.

    Examples
    --------
    >>> OutputFormatSpec.coerce("json")
    OutputFormatSpec(name='json', args=())
    >>> OutputFormatSpec.coerce({"name": "raw", "args": ["\\r\\n"]}).args
    ('\\r\\n',)
    """

    model_config = ConfigDict(frozen=True)

    name: str
    args: tuple[Any, ...] = ()

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("output format name must not be empty")
        return value

    @classmethod
    def coerce(cls, value: OutputFormatSpec | str | Mapping[str, Any]) -> OutputFormatSpec:
        """Normalize a legacy bare format name or a mapping into a spec.

        Raises
        ------
        TypeError
            If *value* is not a spec, a string, or a mapping.
        pydantic.ValidationError
            If the string or mapping does not describe a valid spec.
        """
        if isinstance(value, OutputFormatSpec):
            return value
        if isinstance(value, str):
            return cls(name=value)
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        raise TypeError(
            f"Cannot build an output format spec from {type(value).__name__}"
        )

    def __str__(self) -> str:
        if not self.args:
            return self.name
        rendered = ", ".join(repr(a) for a in self.args)
        return f"{self.name}({rendered})"
