"""
Storefront orchestration: checkout, gateway payments, order tracking.
"""
