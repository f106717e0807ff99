"""
PATH: products/services/__init__.py

Catalog services: pricing, stock, spreadsheet import/export, media.

Import submodules directly (products.services.pricing etc.); models import
pricing, so this package must stay free of model imports.
"""
