"""Declaration item validators.

Enforces before a declaration can be finalized:
- At least one item exists for the period
- Every item has a date, a discipline name, an activity type and positive hours

Findings are returned, not raised. DeclarationValidation.raise_for_errors()
turns them into NoActivityError / IncompleteItemError for finalization.
"""

from collections.abc import Sequence

from declaration_engine.declarations.types import DeclarationIssue, DeclarationItem, DeclarationValidation


def missing_fields(item: DeclarationItem) -> list[str]:
    """Names of the fields failing completeness checks on one item."""
    fields: list[str] = []
    if item.date is None:
        fields.append("date")
    if not item.discipline_name:
        fields.append("discipline_name")
    if item.total_hours <= 0:
        fields.append("total_hours")
    if item.activity_type is None:
        fields.append("activity_type")
    return fields


def validate_declaration_items(items: Sequence[DeclarationItem]) -> DeclarationValidation:
    """Validate generated declaration items.

    Args:
        items: Items in declaration order

    Returns:
        DeclarationValidation listing every finding
    """
    errors: list[DeclarationIssue] = []

    if not items:
        errors.append(
            DeclarationIssue(
                code="no_activity",
                message="No teaching hours recorded for the requested period",
            )
        )

    for index, item in enumerate(items):
        fields = missing_fields(item)
        if fields:
            errors.append(
                DeclarationIssue(
                    code="incomplete_item",
                    message=f"Item {index + 1}: missing or invalid {', '.join(fields)}",
                    item_index=index,
                    fields=fields,
                )
            )

    return DeclarationValidation(is_valid=not errors, errors=errors)
