"""Services for the payroll kernel (write side)."""

from payroll_kernel.services.auth_service import AuthService
from payroll_kernel.services.directory_service import DirectoryService
from payroll_kernel.services.payment_service import PaymentLedgerService

__all__ = [
    "AuthService",
    "DirectoryService",
    "PaymentLedgerService",
]
