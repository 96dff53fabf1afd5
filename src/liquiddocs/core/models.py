"""Pydantic models for representing parsed doc blocks and batch results.

This module defines the core data structures used throughout liquiddocs for
representing the content of ``{% doc %}`` tags and the per-file outcome of
parsing a batch of templates. All models use Pydantic v2 for validation and
serialization.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator


class ParamKind(str, Enum):
    """Kinds of parameter types a doc block can declare."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    PLATFORM = "platform"  # Named object from the platform allow-list


BUILTIN_KINDS = {
    "string": ParamKind.STRING,
    "number": ParamKind.NUMBER,
    "boolean": ParamKind.BOOLEAN,
    "object": ParamKind.OBJECT,
}

_WIRE_NAMES = {
    ParamKind.STRING: "String",
    ParamKind.NUMBER: "Number",
    ParamKind.BOOLEAN: "Boolean",
    ParamKind.OBJECT: "Object",
}


class ParamType(BaseModel):
    """Declared type of a ``@param`` annotation.

    A closed set of variants: the four built-ins, an array wrapping one of
    the other kinds, or a platform object referenced by name.

    Attributes:
        kind: Variant of the type
        name: Object name (platform objects only)
        item: Element type (arrays only)
    """

    model_config = ConfigDict(frozen=True)

    kind: ParamKind
    name: Optional[str] = None
    item: Optional[ParamType] = None

    @model_validator(mode="after")
    def validate_variant(self) -> ParamType:
        """Validate that the payload matches the variant."""
        if self.kind == ParamKind.ARRAY:
            if self.item is None:
                raise ValueError("Array type requires an item type")
            if self.item.kind == ParamKind.ARRAY:
                raise ValueError("Nested array types are not supported")
        elif self.item is not None:
            raise ValueError(f"Only array types carry an item type, not {self.kind.value}")

        if self.kind == ParamKind.PLATFORM:
            if not self.name or not self.name.strip():
                raise ValueError("Platform object type requires a name")
        elif self.name is not None:
            raise ValueError(f"Only platform object types carry a name, not {self.kind.value}")
        return self

    @classmethod
    def builtin(cls, kind: ParamKind) -> ParamType:
        """Create one of the four built-in types."""
        return cls(kind=kind)

    @classmethod
    def array_of(cls, item: ParamType) -> ParamType:
        """Create an array type wrapping ``item``."""
        return cls(kind=ParamKind.ARRAY, item=item)

    @classmethod
    def platform(cls, name: str) -> ParamType:
        """Create a platform object type."""
        return cls(kind=ParamKind.PLATFORM, name=name)

    @property
    def is_array(self) -> bool:
        """Check if this type is an array."""
        return self.kind == ParamKind.ARRAY

    @model_serializer(mode="plain")
    def serialize(self) -> Any:
        """Serialize to the stable external shape.

        Built-ins render as ``"String"``, arrays as ``{"ArrayOf": <item>}``
        and platform objects as ``{"PlatformObject": "<name>"}``.
        """
        if self.kind == ParamKind.ARRAY:
            if self.item is None:
                raise ValueError("Array type requires an item type")
            return {"ArrayOf": self.item.serialize()}
        if self.kind == ParamKind.PLATFORM:
            return {"PlatformObject": self.name}
        return _WIRE_NAMES[self.kind]

    def __str__(self) -> str:
        if self.kind == ParamKind.ARRAY:
            return f"{self.item}[]"
        if self.kind == ParamKind.PLATFORM:
            return str(self.name)
        return self.kind.value


class Param(BaseModel):
    """A single ``@param`` annotation.

    Attributes:
        name: Parameter name
        description: Text after the name (``-`` prefix removed)
        type_: Declared type, if a ``{type}`` was given
        optional: Whether the name was wrapped in ``[...]``
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: Optional[str] = None
    type_: Optional[ParamType] = Field(default=None, serialization_alias="type")
    optional: bool = False


class DocBlock(BaseModel):
    """Structured content of one ``{% doc %}`` block.

    Attributes:
        description: Leading text or first ``@description`` body
        param: Parameters in source order
        example: Dedented ``@example`` sections in source order
    """

    model_config = ConfigDict(frozen=True)

    description: str = ""
    param: list[Param] = Field(default_factory=list)
    example: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Check if the block carries no content at all."""
        return not (self.description or self.param or self.example)

    def get_param(self, name: str) -> Optional[Param]:
        """Get a parameter by name if it exists.

        Args:
            name: Parameter name to search for

        Returns:
            Param if found, None otherwise
        """
        for param in self.param:
            if param.name == name:
                return param
        return None


class FileInput(BaseModel):
    """A template handed to the batch parser.

    Attributes:
        path: Display path of the file
        content: Full template text
    """

    model_config = ConfigDict(frozen=True)

    path: str
    content: str

    @property
    def size(self) -> int:
        """Size of the content in UTF-8 bytes."""
        return len(self.content.encode("utf-8"))


class Diagnostic(BaseModel):
    """A parse problem located in a template.

    Attributes:
        line: 1-indexed line in the template
        column: 1-indexed column in the template
        message: One-line human readable message
    """

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=1)
    column: int = Field(ge=1)
    message: str


class ParseOutcome(BaseModel):
    """Successes and failures for all doc blocks of one template.

    Attributes:
        success: Blocks that parsed, in source order
        errors: Diagnostics for blocks that failed, in source order
    """

    success: list[DocBlock] = Field(default_factory=list)
    errors: list[Diagnostic] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if any block failed to parse."""
        return bool(self.errors)


class FileResult(BaseModel):
    """Result of parsing one file of a batch.

    Attributes:
        path: Path of the parsed file
        docs: Parse outcome, or None when the file has no doc block
    """

    path: str
    docs: Optional[ParseOutcome] = None

    @property
    def has_docs(self) -> bool:
        """Check if the scanner found at least one doc block."""
        return self.docs is not None

    @property
    def errors(self) -> list[Diagnostic]:
        """Diagnostics of the file (empty when it has no doc block)."""
        return self.docs.errors if self.docs else []
