"""
Tests for CartItem, Document and validation
"""

import pytest

from conftest import make_document
from doccart.domain.cart_item import CartItem
from doccart.domain.validation import CartValidator, ValidationResult, validate_add_request


class TestCartItem:
    """Tests for CartItem."""

    def test_identity_by_document_id(self):
        """Two items with the same document are the same cart entry."""
        a = CartItem(make_document(7, "Seven"), 1)
        b = CartItem(make_document(7, "Seven (new title)"), 5)

        assert a == b
        assert hash(a) == hash(b)
        assert a != CartItem(make_document(8), 1)

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_must_be_positive(self, quantity):
        with pytest.raises(ValueError):
            CartItem(make_document(1), quantity)

    def test_set_quantity_rejects_zero(self):
        item = CartItem(make_document(1), 2)
        with pytest.raises(ValueError):
            item.set_quantity(0)
        assert item.quantity == 2

    def test_dict_keeps_document_snapshot(self):
        """Serialized item carries title and limits of the document."""
        item = CartItem(make_document(4, "Leaflet", limit=2), 2)

        restored = CartItem.from_dict(item.to_dict())

        assert restored.document_id == 4
        assert restored.quantity == 2
        assert restored.document.title == "Leaflet"
        assert restored.document.maximum_quantity == 2


class TestValidation:
    """Tests for CartValidator."""

    def test_valid_request(self):
        result = validate_add_request(3, make_document(1, limit=3))

        assert result.valid
        assert result.errors == []

    def test_not_allowed(self):
        result = validate_add_request(1, make_document(1, allowed=False))

        assert not result.valid
        assert result.errors == ["You are not allowed to add this document"]

    def test_quantity_exceeded_names_title_and_limit(self):
        result = validate_add_request(4, make_document(2, "Planning Guidelines", limit=3))

        assert not result.valid
        assert len(result.errors) == 1
        assert "Planning Guidelines" in result.errors[0]
        assert "3" in result.errors[0]

    def test_errors_accumulate(self):
        """Both rules are checked, no short-circuit."""
        result = validate_add_request(10, make_document(2, "Memo", allowed=False, limit=1))

        assert len(result.errors) == 2
        assert result.message() == "\n".join(f"* {e}" for e in result.errors)

    def test_limit_ignored_without_quantity_limit_flag(self):
        document = make_document(1).model_copy(update={"maximum_quantity": 1})

        assert validate_add_request(50, document).valid

    def test_extra_rules_append_errors(self):
        """Pluggable rules run after the built-in checks."""

        def no_bulk_orders(result: ValidationResult, quantity, document):
            if quantity > 10:
                result.error("Bulk orders go through the print office")

        validator = CartValidator(rules=[no_bulk_orders])

        result = validator.validate(11, make_document(2, "Guide", limit=5))

        assert result.errors[0].startswith("Maximum of 5 documents exceeded")
        assert result.errors[1] == "Bulk orders go through the print office"
        assert validator.validate(2, make_document(2, limit=5)).valid
