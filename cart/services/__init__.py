"""
PATH: cart/services/__init__.py

Cart mutators and owner resolution.
"""
