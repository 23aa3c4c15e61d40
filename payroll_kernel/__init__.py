"""
Payroll Kernel

Directory and payment core for a small organization:
- Agents and departments with a consistent, symmetric head relationship
- Payments gated by amount limits and a role/approval eligibility policy
- Read-only statistics over the payment history
"""

__version__ = "0.1.0"
