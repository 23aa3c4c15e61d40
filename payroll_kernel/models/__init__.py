"""Domain models for the payroll kernel."""

from payroll_kernel.models.agent import Agent
from payroll_kernel.models.department import Department
from payroll_kernel.models.payment import Payment

__all__ = [
    "Agent",
    "Department",
    "Payment",
]
