"""
repositories/ - Data Access Layer
==================================
Each repository owns the SQL for one table and converts rows into
domain model objects. Handlers never see SQL or raw rows.
"""
