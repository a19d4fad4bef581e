"""
Job Board
Job postings, user accounts and resume-backed applications.

Architecture:
- FastAPI: HTTP routes, cookie sessions, multipart uploads
- SQL database (PostgreSQL, SQLite for tests): users, jobs, applications, sessions
- Local disk: uploaded resumes
"""

__version__ = "1.0.0"
