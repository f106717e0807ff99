"""
PATH: orders/services/__init__.py

Order placement, lifecycle rules, payments, numbering, documents.
"""
