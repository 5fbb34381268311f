from .clear_due import render_clear_due
from .invoice_editor import render_invoice_editor
from .invoice_list import render_invoice_list

__all__ = ["render_clear_due", "render_invoice_editor", "render_invoice_list"]
