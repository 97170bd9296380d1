"""
models/ - Domain Layer
======================
Plain dataclasses describing the records the API works with.
No database or HTTP code lives here.
"""
