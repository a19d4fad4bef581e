"""Services - the SQL-backed operations behind the API routes."""
