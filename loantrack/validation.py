"""Validation of loan input before it reaches the ledger.

Errors make the input unusable; warnings are advisory and only shown to
the user. Analytics code never calls into this module: by the time a
``Loan`` exists it is assumed well-formed.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from loantrack.config import ValidationConfig
from loantrack.exceptions import LoanValidationError
from loantrack.records import resolve_today

REQUIRED_FIELDS = ("lender_name", "phone_number", "amount", "repayment_date")

NAME_PATTERN = re.compile(r"^[a-zA-Z\s'-]+$")
PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]+$")
PHONE_SEPARATORS = re.compile(r"[\s\-()]")


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def merge(self, other: "ValidationResult") -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


def validate_lender_name(name: Any, config: ValidationConfig | None = None) -> ValidationResult:
    config = config or ValidationConfig()
    result = ValidationResult()

    if not isinstance(name, str) or not name:
        result.errors.append("Lender name must be a valid string")
        return result

    trimmed = name.strip()

    if len(trimmed) < config.lender_name_min_length:
        result.errors.append(
            f"Lender name must be at least {config.lender_name_min_length} characters long"
        )
    if len(trimmed) > config.lender_name_max_length:
        result.errors.append(
            f"Lender name cannot exceed {config.lender_name_max_length} characters"
        )
    if trimmed.isdigit():
        result.errors.append("Lender name cannot be only numbers")
    elif not NAME_PATTERN.match(trimmed):
        result.errors.append(
            "Lender name can only contain letters, spaces, hyphens, and apostrophes"
        )

    if name != trimmed:
        result.warnings.append("Lender name has leading or trailing spaces")
    if re.search(r"\s{2,}", trimmed):
        result.warnings.append("Lender name contains multiple consecutive spaces")
    if trimmed.lower() in ("unknown", "n/a"):
        result.warnings.append("Consider using a more specific lender name")

    return result


def validate_phone_number(phone: Any, config: ValidationConfig | None = None) -> ValidationResult:
    """Optional leading ``+``, then digits, spaces, hyphens or parentheses.

    Between ``phone_min_digits`` and ``phone_max_digits`` characters must
    remain once separators are removed.
    """
    config = config or ValidationConfig()
    result = ValidationResult()

    if not isinstance(phone, str) or not phone:
        result.errors.append("Phone number must be a valid string")
        return result

    clean = PHONE_SEPARATORS.sub("", phone)
    digits = clean.lstrip("+")

    if len(digits) < config.phone_min_digits:
        result.errors.append(f"Phone number must be at least {config.phone_min_digits} digits")
    if len(digits) > config.phone_max_digits:
        result.errors.append(f"Phone number cannot exceed {config.phone_max_digits} digits")
    if not PHONE_PATTERN.match(phone):
        result.errors.append("Phone number contains invalid characters")
        return result

    if digits.startswith("234"):
        local = digits[3:]
        if len(local) != 10:
            result.warnings.append("Nigerian phone number should have 10 digits after country code")
        if local[:1] not in ("7", "8", "9"):
            result.warnings.append("Nigerian mobile numbers typically start with 7, 8, or 9")

    if phone.startswith("+"):
        if len(digits) < 11:
            result.warnings.append("International phone numbers are typically longer")
    elif not phone.startswith("0") and len(digits) == 10:
        result.warnings.append("Consider adding country code or leading zero")

    if len(set(digits)) == 1:
        result.warnings.append("Phone number appears to be all the same digit")
    if digits in ("1234567890", "0123456789"):
        result.warnings.append("Phone number appears to be a placeholder")

    return result


def _to_decimal(value: Any) -> Decimal | None:
    if isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def validate_amount(amount: Any, config: ValidationConfig | None = None) -> ValidationResult:
    config = config or ValidationConfig()
    result = ValidationResult()

    number = _to_decimal(amount)
    if number is None:
        result.errors.append("Amount must be a valid number")
        return result

    if number <= 0:
        result.errors.append("Amount must be greater than zero")
    if number < config.min_amount:
        result.errors.append(f"Amount must be at least {config.min_amount:,}")
    if number > config.max_amount:
        result.errors.append(f"Amount cannot exceed {config.max_amount:,}")

    if number != number.to_integral_value():
        result.warnings.append("Amount contains decimal places - will be rounded")
    if 0 < number < 1000:
        result.warnings.append("Very small loan amount - consider if this is correct")
    if number > 1_000_000:
        result.warnings.append("Large loan amount - ensure this is accurate")
    if re.fullmatch(r"(\d)\1+", format(number.normalize(), "f")):
        result.warnings.append("Amount appears to be repeated digits (e.g., 1111)")

    return result


def parse_date(value: Any) -> date | None:
    """Parse an ISO ``YYYY-MM-DD`` string (or date/datetime) into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def validate_repayment_date(
    value: Any,
    now: date | datetime | None = None,
) -> ValidationResult:
    """The repayment date must parse and fall strictly after today.

    A due date of today is rejected along with past dates, so every new
    loan has at least one full day before it can become overdue.
    """
    result = ValidationResult()

    if not value:
        result.errors.append("Repayment date must be a valid string")
        return result

    repayment = parse_date(value)
    if repayment is None:
        result.errors.append("Repayment date is not a valid date")
        return result

    today = resolve_today(now)
    if repayment <= today:
        result.errors.append("Repayment date must be in the future")

    try:
        five_years = today.replace(year=today.year + 5)
    except ValueError:  # Feb 29
        five_years = today.replace(year=today.year + 5, day=28)
    if repayment > five_years:
        result.warnings.append("Repayment date is more than 5 years in the future")

    if today < repayment <= today + timedelta(days=1):
        result.warnings.append("Repayment date is very soon - ensure this is correct")
    if repayment.weekday() >= 5:
        result.warnings.append("Repayment date falls on a weekend")
    if (repayment.month, repayment.day) in ((12, 25), (1, 1)):
        result.warnings.append("Repayment date falls on a major holiday")

    return result


def validate_interest_rate(rate: Any, config: ValidationConfig | None = None) -> ValidationResult:
    config = config or ValidationConfig()
    result = ValidationResult()

    number = _to_decimal(rate)
    if number is None:
        result.errors.append("Interest rate must be a valid number")
        return result

    if number < config.min_interest_rate:
        result.errors.append("Interest rate cannot be negative")
    if number > config.max_interest_rate:
        result.errors.append(f"Interest rate cannot exceed {config.max_interest_rate}%")

    if number == 0:
        result.warnings.append("Zero interest rate - confirm this is intentional")
    if number > 50:
        result.warnings.append("Very high interest rate - ensure this is correct")
    if 0 < number < 1:
        result.warnings.append("Very low interest rate - confirm this is correct")
    if number != number.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP):
        result.warnings.append("Interest rate has more than 2 decimal places")

    return result


def validate_business_rules(
    data: Mapping[str, Any],
    now: date | datetime | None = None,
) -> ValidationResult:
    result = ValidationResult()
    amount = _to_decimal(data.get("amount"))
    rate = _to_decimal(data.get("interest_rate"))
    repayment = parse_date(data.get("repayment_date"))

    if amount and rate:
        if amount + amount * rate / 100 > 50_000_000:
            result.warnings.append("Total amount with interest is very large")

    if amount and repayment:
        days_left = (repayment - resolve_today(now)).days
        if amount > 100_000 and days_left < 7:
            result.warnings.append("Large loan amount with very short repayment period")
        if amount < 1000 and days_left > 365:
            result.warnings.append("Small loan amount with very long repayment period")

    return result


def validate_loan(
    data: Mapping[str, Any],
    now: date | datetime | None = None,
    config: ValidationConfig | None = None,
) -> ValidationResult:
    """Validate raw loan input.

    Parameters
    ----------
    data : Mapping[str, Any]
        Keys ``lender_name``, ``phone_number``, ``amount``,
        ``repayment_date`` and optional ``interest_rate``.
    now : date | datetime | None
        Evaluation time for date checks.
    config : ValidationConfig | None
        Limits to apply.

    Returns
    -------
    ValidationResult
        Errors and warnings collected from every field check.
    """
    config = config or ValidationConfig()
    result = ValidationResult()

    for name in REQUIRED_FIELDS:
        if data.get(name) in (None, ""):
            result.errors.append(f"{name.replace('_', ' ').capitalize()} is required")

    if data.get("lender_name"):
        result.merge(validate_lender_name(data["lender_name"], config))
    if data.get("phone_number"):
        result.merge(validate_phone_number(data["phone_number"], config))
    if data.get("amount") not in (None, ""):
        result.merge(validate_amount(data["amount"], config))
    if data.get("repayment_date"):
        result.merge(validate_repayment_date(data["repayment_date"], now))
    if data.get("interest_rate") not in (None, ""):
        result.merge(validate_interest_rate(data["interest_rate"], config))

    result.merge(validate_business_rules(data, now))
    return result


def validate_for_duplicates(entries: list[Mapping[str, Any]]) -> ValidationResult:
    """Warn about repeated phone numbers and repeated lender/phone pairs."""
    result = ValidationResult()

    phones = [entry.get("phone_number") for entry in entries if entry.get("phone_number")]
    duplicate_phones = sorted({phone for phone in phones if phones.count(phone) > 1})
    if duplicate_phones:
        result.warnings.append(f"Duplicate phone numbers found: {', '.join(duplicate_phones)}")

    pairs = [
        (entry["lender_name"], entry["phone_number"])
        for entry in entries
        if entry.get("lender_name") and entry.get("phone_number")
    ]
    if len(pairs) != len(set(pairs)):
        result.warnings.append(
            "Potential duplicate loans detected (same lender and phone number)"
        )

    return result


def _rounded(value: Any, exponent: str) -> Any:
    """``value`` rounded half-up to ``exponent``, or unchanged when it is not a number."""
    number = _to_decimal(value)
    if number is None:
        return value
    try:
        return number.quantize(Decimal(exponent), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return value


def sanitize_loan_data(data: Mapping[str, Any]) -> dict[str, Any]:
    """Normalise raw input: trimmed name/phone, whole amount, 2 dp rate, ISO date.

    Values that cannot be parsed are kept as given so that ``validate_loan``
    still reports them.
    """
    sanitized: dict[str, Any] = {}

    if data.get("lender_name"):
        sanitized["lender_name"] = " ".join(str(data["lender_name"]).split())
    if data.get("phone_number"):
        sanitized["phone_number"] = str(data["phone_number"]).strip()

    if data.get("amount") not in (None, ""):
        sanitized["amount"] = _rounded(data["amount"], "1")
    if data.get("interest_rate") not in (None, ""):
        sanitized["interest_rate"] = _rounded(data["interest_rate"], "0.01")

    if data.get("repayment_date"):
        repayment = parse_date(data["repayment_date"])
        sanitized["repayment_date"] = (
            repayment.isoformat() if repayment is not None else data["repayment_date"]
        )

    for key in ("loan_id", "is_paid"):
        if key in data:
            sanitized[key] = data[key]

    return sanitized


def ensure_valid(result: ValidationResult) -> ValidationResult:
    """Raise ``LoanValidationError`` when ``result`` carries errors."""
    if not result.is_valid:
        raise LoanValidationError(result.errors)
    return result
