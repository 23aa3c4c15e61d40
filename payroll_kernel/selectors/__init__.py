"""Selectors for the payroll kernel (read side)."""

from payroll_kernel.selectors.agent_selector import AgentSelector
from payroll_kernel.selectors.department_selector import DepartmentSelector
from payroll_kernel.selectors.payment_selector import PaymentSelector
from payroll_kernel.selectors.statistics_selector import StatisticsSelector

__all__ = [
    "AgentSelector",
    "DepartmentSelector",
    "PaymentSelector",
    "StatisticsSelector",
]
