"""Tests for timeweb_mcp/shared/schemas.py."""

import pytest
from pydantic import Field

from timeweb_mcp.shared.errors import InvalidArgument
from timeweb_mcp.shared.schemas import (
    PaginatedArgs,
    ResponseFormat,
    id_field,
    supplied,
    validate_tool_args,
)


class WidgetArgs(PaginatedArgs):
    widget_id: int = id_field("Widget ID")
    name: str | None = Field(None, description="Widget name")


class TestValidateToolArgs:
    def test_valid_arguments(self):
        args = validate_tool_args(WidgetArgs, {"widget_id": 3, "format": "json", "limit": 10})
        assert args.widget_id == 3
        assert args.format == ResponseFormat.JSON
        assert args.limit == 10

    def test_missing_required_names_field(self):
        with pytest.raises(InvalidArgument) as exc:
            validate_tool_args(WidgetArgs, {})
        assert exc.value.field == "widget_id"

    def test_none_arguments_treated_as_empty(self):
        with pytest.raises(InvalidArgument):
            validate_tool_args(WidgetArgs, None)

    def test_non_positive_id_rejected(self):
        with pytest.raises(InvalidArgument) as exc:
            validate_tool_args(WidgetArgs, {"widget_id": 0})
        assert exc.value.field == "widget_id"

    @pytest.mark.parametrize("limit", [0, 101])
    def test_limit_bounds(self, limit):
        with pytest.raises(InvalidArgument) as exc:
            validate_tool_args(WidgetArgs, {"widget_id": 1, "limit": limit})
        assert exc.value.field == "limit"

    def test_negative_offset_rejected(self):
        with pytest.raises(InvalidArgument) as exc:
            validate_tool_args(WidgetArgs, {"widget_id": 1, "offset": -1})
        assert exc.value.field == "offset"

    def test_unknown_format_rejected(self):
        with pytest.raises(InvalidArgument) as exc:
            validate_tool_args(WidgetArgs, {"widget_id": 1, "format": "xml"})
        assert exc.value.field == "format"

    def test_extra_fields_ignored(self):
        args = validate_tool_args(WidgetArgs, {"widget_id": 1, "colour": "red"})
        assert not hasattr(args, "colour")


class TestSupplied:
    def test_omits_absent_and_control_fields(self):
        args = validate_tool_args(WidgetArgs, {"widget_id": 1, "format": "json", "limit": 5})
        assert supplied(args) == {"widget_id": 1}

    def test_keeps_supplied_optional(self):
        args = validate_tool_args(WidgetArgs, {"widget_id": 1, "name": "w"})
        assert supplied(args, {"widget_id"}) == {"name": "w"}
