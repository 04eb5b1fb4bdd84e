"""Domain services over invoices and tax rate lookups."""
