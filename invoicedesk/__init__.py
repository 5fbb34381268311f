"""InvoiceDesk: invoices, payments and spreadsheet sync for a small consultancy front desk."""

__version__ = "0.1.0"
