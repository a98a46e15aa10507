"""Enumeration types for loan records and analytics results."""

from enum import Enum


class LoanStatus(str, Enum):
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    PENDING = "PENDING"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Impact(str, Enum):
    VERY_LOW = "Very Low"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class SortField(str, Enum):
    DATE = "date"
    AMOUNT = "amount"
    LENDER = "lender"
    STATUS = "status"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
