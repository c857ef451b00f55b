"""
Form validation for invoices, customers and users.

Every validator is a pure function of the submitted data: it never touches
the database and never raises for bad input. The result either carries a
normalized record (``to_record()``) or a mapping of field name to the ordered
list of messages the form should display next to that field.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Mapping, Optional

from fincontrol.schemas.dtos import CustomerInput, InvoiceInput, UserInput

INVOICE_STATUSES = ("pending", "paid")
HALF_CENT = Decimal("0.005")
# Largest value the invoices.amount INTEGER column holds, in cents
MAX_AMOUNT_CENTS = 2_147_483_647
# Anything at or above this rounds half-up past MAX_AMOUNT_CENTS
AMOUNT_CEILING = (Decimal(MAX_AMOUNT_CENTS) + Decimal("0.5")) / 100

CUSTOMER_REQUIRED_MESSAGE = "Please select a customer."
AMOUNT_MESSAGE = "Please enter an amount greater than $0."
STATUS_MESSAGE = "Please select an invoice status."
REQUIRED_MESSAGE = "This field has to be filled."
EMAIL_MESSAGE = "This is not a valid email."
PASSWORD_MIN_LENGTH = 6
PASSWORD_MESSAGE = (
    f"String must contain at least {PASSWORD_MIN_LENGTH} character(s)"
)

# Same shape browsers and most form libraries accept: no leading dot, no
# consecutive dots, a dotted domain with an alphabetic TLD.
EMAIL_RE = re.compile(
    r"^(?!\.)(?!.*\.\.)[A-Z0-9_'+\-.]*[A-Z0-9_+\-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}$",
    re.IGNORECASE,
)


class ValidationResult:
    """Container for validation results."""

    def __init__(self, record_factory: Optional[Callable[..., Any]] = None):
        self.field_errors: Dict[str, List[str]] = {}
        self.cleaned_data: Dict[str, Any] = {}
        self._record_factory = record_factory

    @property
    def is_valid(self) -> bool:
        return not self.field_errors

    def add_error(self, message: str, field: str):
        """Append a message to the field's error list, keeping order."""
        self.field_errors.setdefault(field, []).append(message)

    def to_record(self):
        """Build the normalized record from ``cleaned_data``.

        Raises:
            ValueError: If the result holds errors.
        """
        if not self.is_valid:
            raise ValueError("Cannot build a record from invalid input")
        if self._record_factory is None:
            return dict(self.cleaned_data)
        return self._record_factory(**self.cleaned_data)


class BaseValidator:
    """Base validator with common validation methods."""

    record_factory: Optional[Callable[..., Any]] = None

    def validate(
        self, data: Mapping[str, Any]
    ) -> ValidationResult:  # pragma: no cover - interface definition
        """Validate data for a specific entity type."""
        raise NotImplementedError("Subclasses must implement validate")

    def new_result(self) -> ValidationResult:
        return ValidationResult(self.record_factory)

    @staticmethod
    def clean_text(value: Any) -> str:
        """Coerce a raw form value to a stripped string (None becomes '')."""
        if value is None:
            return ""
        if not isinstance(value, str):
            value = str(value)
        return value.strip()

    @staticmethod
    def validate_required_field(
        value: Any, field_name: str, result: ValidationResult, message: str
    ) -> Optional[str]:
        """Validate that a required field is present and not blank."""
        text = BaseValidator.clean_text(value)
        if not text:
            result.add_error(message, field_name)
            return None
        return text

    @staticmethod
    def validate_positive_decimal(
        value: Any, field_name: str, result: ValidationResult, message: str
    ) -> Optional[Decimal]:
        """Coerce text to a finite Decimal strictly greater than zero.

        Blank input coerces to zero and therefore fails the same check as an
        explicit zero or a non-numeric string.
        """
        if isinstance(value, Decimal):
            decimal_value = value
        else:
            text = BaseValidator.clean_text(value) or "0"
            try:
                decimal_value = Decimal(text)
            except (InvalidOperation, TypeError, ValueError):
                result.add_error(message, field_name)
                return None

        if not decimal_value.is_finite() or decimal_value <= 0:
            result.add_error(message, field_name)
            return None

        return decimal_value

    @staticmethod
    def validate_choice(
        value: Any,
        field_name: str,
        result: ValidationResult,
        allowed_values: tuple,
        message: str,
    ) -> Optional[str]:
        """Accept only an exact match against ``allowed_values``."""
        if not isinstance(value, str) or value not in allowed_values:
            result.add_error(message, field_name)
            return None
        return value

    @staticmethod
    def validate_name(value: Any, result: ValidationResult) -> Optional[str]:
        return BaseValidator.validate_required_field(
            value, "name", result, REQUIRED_MESSAGE
        )

    @staticmethod
    def validate_email(value: Any, result: ValidationResult) -> Optional[str]:
        """Non-empty and address-shaped; an empty value gets both messages."""
        text = BaseValidator.clean_text(value)
        if not text:
            result.add_error(REQUIRED_MESSAGE, "email")
        if not EMAIL_RE.match(text):
            result.add_error(EMAIL_MESSAGE, "email")
            return None
        return text


class InvoiceValidator(BaseValidator):
    """Validator for invoice create/update forms."""

    record_factory = InvoiceInput

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        result = self.new_result()

        customer_id = self.validate_required_field(
            data.get("customerId"), "customerId", result, CUSTOMER_REQUIRED_MESSAGE
        )
        if customer_id is not None:
            result.cleaned_data["customer_id"] = customer_id

        amount = self.validate_positive_decimal(
            data.get("amount"), "amount", result, AMOUNT_MESSAGE
        )
        # Sub-cent amounts would be stored as zero cents; huge ones overflow the column
        if amount is not None and (amount < HALF_CENT or amount >= AMOUNT_CEILING):
            result.add_error(AMOUNT_MESSAGE, "amount")
        elif amount is not None:
            result.cleaned_data["amount"] = amount

        status = self.validate_choice(
            data.get("status"), "status", result, INVOICE_STATUSES, STATUS_MESSAGE
        )
        if status is not None:
            result.cleaned_data["status"] = status

        return result


class CustomerValidator(BaseValidator):
    """Validator for customer create/update forms."""

    record_factory = CustomerInput

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        result = self.new_result()

        name = self.validate_name(data.get("name"), result)
        if name is not None:
            result.cleaned_data["name"] = name

        email = self.validate_email(data.get("email"), result)
        if email is not None:
            result.cleaned_data["email"] = email

        return result


class UserValidator(BaseValidator):
    """Validator for the sign-up form."""

    record_factory = UserInput

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        result = self.new_result()

        name = self.validate_name(data.get("name"), result)
        if name is not None:
            result.cleaned_data["name"] = name

        email = self.validate_email(data.get("email"), result)
        if email is not None:
            result.cleaned_data["email"] = email

        # Passwords are taken verbatim: whitespace is significant
        password = data.get("password")
        if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
            result.add_error(PASSWORD_MESSAGE, "password")
        else:
            result.cleaned_data["password"] = password

        return result


class CredentialsValidator(BaseValidator):
    """Validator for the sign-in form."""

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        result = self.new_result()

        email = self.validate_email(data.get("email"), result)
        if email is not None:
            result.cleaned_data["email"] = email

        password = data.get("password")
        if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
            result.add_error(PASSWORD_MESSAGE, "password")
        else:
            result.cleaned_data["password"] = password

        return result


def get_validator(entity_type: str) -> BaseValidator:
    """Get validator instance for entity type."""
    validators = {
        "invoice": InvoiceValidator(),
        "customer": CustomerValidator(),
        "user": UserValidator(),
        "credentials": CredentialsValidator(),
    }

    validator = validators.get(entity_type.lower())
    if not validator:
        raise ValueError(f"No validator found for entity type: {entity_type}")

    return validator


def validate_invoice(data: Mapping[str, Any]) -> ValidationResult:
    """Validate invoice form data."""
    return get_validator("invoice").validate(data)


def validate_customer(data: Mapping[str, Any]) -> ValidationResult:
    """Validate customer form data."""
    return get_validator("customer").validate(data)


def validate_user(data: Mapping[str, Any]) -> ValidationResult:
    """Validate sign-up form data."""
    return get_validator("user").validate(data)


def validate_credentials(data: Mapping[str, Any]) -> ValidationResult:
    """Validate sign-in form data."""
    return get_validator("credentials").validate(data)
