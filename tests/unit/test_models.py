"""Unit tests for the doc block data models."""

import pytest
from pydantic import ValidationError

from liquiddocs.core.models import (
    Diagnostic,
    DocBlock,
    FileInput,
    FileResult,
    Param,
    ParamKind,
    ParamType,
    ParseOutcome,
)


class TestParamType:
    """Tests for ParamType variants."""

    def test_builtin(self):
        """Test creating a built-in type."""
        param_type = ParamType.builtin(ParamKind.NUMBER)

        assert param_type.kind == ParamKind.NUMBER
        assert not param_type.is_array
        assert str(param_type) == "number"

    def test_array(self):
        """Test wrapping a type in an array."""
        param_type = ParamType.array_of(ParamType.platform("product"))

        assert param_type.is_array
        assert param_type.item == ParamType.platform("product")
        assert str(param_type) == "product[]"

    def test_nested_array_rejected(self):
        """Test that arrays of arrays are not representable."""
        inner = ParamType.array_of(ParamType.builtin(ParamKind.STRING))

        with pytest.raises(ValidationError):
            ParamType.array_of(inner)

    def test_array_requires_item(self):
        """Test that an array without item type is rejected."""
        with pytest.raises(ValidationError):
            ParamType(kind=ParamKind.ARRAY)

    def test_platform_requires_name(self):
        """Test that a platform object needs a name."""
        with pytest.raises(ValidationError):
            ParamType(kind=ParamKind.PLATFORM)

    def test_builtin_rejects_name(self):
        """Test that built-ins carry no payload."""
        with pytest.raises(ValidationError):
            ParamType(kind=ParamKind.STRING, name="string")

    def test_frozen(self):
        """Test that types are immutable."""
        param_type = ParamType.builtin(ParamKind.STRING)

        with pytest.raises(ValidationError):
            param_type.kind = ParamKind.NUMBER

    @pytest.mark.parametrize(
        "param_type,expected",
        [
            (ParamType.builtin(ParamKind.STRING), "String"),
            (ParamType.builtin(ParamKind.NUMBER), "Number"),
            (ParamType.builtin(ParamKind.BOOLEAN), "Boolean"),
            (ParamType.builtin(ParamKind.OBJECT), "Object"),
            (ParamType.platform("collection"), {"PlatformObject": "collection"}),
            (
                ParamType.array_of(ParamType.builtin(ParamKind.NUMBER)),
                {"ArrayOf": "Number"},
            ),
            (
                ParamType.array_of(ParamType.platform("image")),
                {"ArrayOf": {"PlatformObject": "image"}},
            ),
        ],
    )
    def test_serialization(self, param_type: ParamType, expected):
        """Test the external representation of each variant."""
        assert param_type.model_dump() == expected

    def test_serialize_array_without_item(self):
        """Test that an unvalidated array without item cannot be serialized."""
        broken = ParamType.model_construct(kind=ParamKind.ARRAY)

        with pytest.raises(ValueError, match="item type"):
            broken.serialize()


class TestDocBlock:
    """Tests for DocBlock."""

    def test_empty(self):
        """Test detecting a block without content."""
        assert DocBlock().is_empty
        assert not DocBlock(description="x").is_empty
        assert not DocBlock(param=[Param(name="a")]).is_empty
        assert not DocBlock(example=["x"]).is_empty

    def test_get_param(self):
        """Test looking up a parameter by name."""
        block = DocBlock(param=[Param(name="a"), Param(name="b", optional=True)])

        assert block.get_param("b") == Param(name="b", optional=True)
        assert block.get_param("c") is None

    def test_dump_by_alias(self):
        """Test the serialized shape of a block."""
        block = DocBlock(
            description="Card",
            param=[
                Param(
                    name="items",
                    description="Things",
                    type_=ParamType.array_of(ParamType.builtin(ParamKind.STRING)),
                    optional=True,
                ),
                Param(name="raw"),
            ],
            example=["{% render 'card' %}"],
        )

        assert block.model_dump(by_alias=True) == {
            "description": "Card",
            "param": [
                {
                    "name": "items",
                    "description": "Things",
                    "type": {"ArrayOf": "String"},
                    "optional": True,
                },
                {"name": "raw", "description": None, "type": None, "optional": False},
            ],
            "example": ["{% render 'card' %}"],
        }


class TestBatchModels:
    """Tests for the batch boundary models."""

    def test_file_input_size_in_bytes(self):
        """Test that size counts UTF-8 bytes."""
        assert FileInput(path="a.liquid", content="héllo").size == 6

    def test_diagnostic_positions_are_one_based(self):
        """Test that line and column start at 1."""
        with pytest.raises(ValidationError):
            Diagnostic(line=0, column=1, message="x")

    def test_file_result_without_docs(self):
        """Test a file without doc blocks."""
        result = FileResult(path="a.liquid")

        assert not result.has_docs
        assert result.errors == []

    def test_file_result_with_errors(self):
        """Test a file with a failed block."""
        diagnostic = Diagnostic(line=2, column=3, message="No doc content found on 2:3")
        outcome = ParseOutcome(errors=[diagnostic])
        result = FileResult(path="a.liquid", docs=outcome)

        assert result.has_docs
        assert outcome.has_errors
        assert result.errors == [diagnostic]
