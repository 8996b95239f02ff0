"""
Cargo ERP Documents - Public API
==================================
Document numbering for invoices and job orders.
"""
