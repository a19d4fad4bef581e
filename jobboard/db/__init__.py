"""
Database module - engine handle, schema bootstrap and seed data.

- database: Database handle (engine lifecycle, transactions)
- schema: table definitions + bootstrap_schema()
- seed: default admin and sample jobs
"""
