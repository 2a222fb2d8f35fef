"""Unit tests for declaration item validation."""

from datetime import date

import pytest

from declaration_engine.declarations.types import DeclarationItem, declaration_title
from declaration_engine.declarations.validators import missing_fields, validate_declaration_items
from declaration_engine.errors import IncompleteItemError, NoActivityError


def _item(**overrides) -> DeclarationItem:
    data = {
        "post_number": 1,
        "post_grade": "Lect",
        "date": date(2024, 10, 1),
        "discipline_name": "Anatomy",
        "activity_type": "LR",
        "groups": "MG1",
        "course_hours": 2,
        "total_hours": 2,
    }
    data.update(overrides)
    return DeclarationItem(**data)


class TestItemCompleteness:
    """Test per-item checks."""

    def test_complete_item(self):
        assert missing_fields(_item()) == []

    def test_all_fields_missing(self):
        item = _item(date=None, discipline_name="", activity_type=None, course_hours=0, total_hours=0)
        assert missing_fields(item) == ["date", "discipline_name", "total_hours", "activity_type"]


class TestValidateItems:
    """Test the declaration-level outcome."""

    def test_valid_items(self):
        validation = validate_declaration_items([_item(), _item(date=date(2024, 10, 15))])
        assert validation.is_valid is True
        validation.raise_for_errors()

    def test_empty_declaration(self):
        validation = validate_declaration_items([])
        assert validation.is_valid is False
        with pytest.raises(NoActivityError, match="2024-10-01"):
            validation.raise_for_errors(date(2024, 10, 1), date(2024, 10, 31))

    def test_incomplete_items_report_indices(self):
        validation = validate_declaration_items([_item(), _item(date=None), _item(total_hours=0)])

        assert validation.is_valid is False
        assert [(e.item_index, e.fields) for e in validation.errors] == [(1, ["date"]), (2, ["total_hours"])]

        with pytest.raises(IncompleteItemError) as exc_info:
            validation.raise_for_errors()
        assert [issue.index for issue in exc_info.value.issues] == [1, 2]
        assert exc_info.value.issues[0].fields == ["date"]


class TestDeclarationTitle:
    def test_title_uses_last_month(self):
        assert declaration_title(date(2024, 10, 31)) == "PO - October 2024"
