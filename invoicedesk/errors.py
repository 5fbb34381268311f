from __future__ import annotations


class InvoiceError(ValueError):
    pass


class InvoiceValidationError(InvoiceError):
    def __init__(self, field_errors: dict[str, str]) -> None:
        super().__init__("Please fill in all required fields")
        self.field_errors = dict(field_errors)


class InvoiceNotFoundError(InvoiceError):
    pass


class PaymentRangeError(InvoiceError):
    pass


class SheetSyncError(InvoiceError):
    pass


class InvoiceConflictError(InvoiceError):
    pass
