"""
utils/ - Shared helpers (logging setup).
"""
