"""
PATH: content/services/__init__.py

Typed readers/writers over the content key/value tables.
"""
