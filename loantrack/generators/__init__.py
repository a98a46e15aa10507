"""Synthetic data generators."""

from loantrack.generators.base import BaseGenerator
from loantrack.generators.loan import LoanGenerator

__all__ = ["BaseGenerator", "LoanGenerator"]
