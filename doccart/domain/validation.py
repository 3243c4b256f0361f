# doccart/domain/validation.py
from dataclasses import dataclass, field
from typing import Callable, Iterable, List

from doccart.domain.documents import Document
from doccart.domain.errors import ERROR_NOT_ALLOWED, ERROR_QUANTITY_EXCEEDED


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def error(self, message: str) -> "ValidationResult":
        self.errors.append(message)
        return self

    def message(self) -> str:
        """Wszystkie bledy jako lista z gwiazdkami (do wyswietlenia)."""
        return "\n".join(f"* {e}" for e in self.errors)


#regula: (result, quantity, document) -> None, moze dopisac bledy do result
ValidationRule = Callable[[ValidationResult, int, Document], None]


class CartValidator:
    """
    Walidacja proponowanej ilosci dokumentu w koszyku.

    Wbudowane reguly (zawsze, w tej kolejnosci):
    - dokument musi byc dozwolony w koszyku
    - ilosc nie moze przekroczyc maximum_quantity gdy dokument ma limit
    Dodatkowe reguly przekazane w `rules` dopisuja kolejne bledy.
    Bledy sie kumuluja, nic nie jest rzucane.
    """

    def __init__(self, rules: Iterable[ValidationRule] = ()):
        self.rules = list(rules)

    def add_rule(self, rule: ValidationRule) -> "CartValidator":
        self.rules.append(rule)
        return self

    def validate(self, quantity: int, document: Document) -> ValidationResult:
        result = ValidationResult()

        if not document.is_allowed_in_cart():
            result.error(ERROR_NOT_ALLOWED)

        if (
            document.has_quantity_limit
            and document.maximum_quantity is not None
            and quantity > document.maximum_quantity
        ):
            result.error(
                ERROR_QUANTITY_EXCEEDED.format(
                    max=document.maximum_quantity,
                    title=document.title,
                )
            )

        for rule in self.rules:
            rule(result, quantity, document)

        return result


default_validator = CartValidator()


def validate_add_request(quantity: int, document: Document) -> ValidationResult:
    return default_validator.validate(quantity, document)
