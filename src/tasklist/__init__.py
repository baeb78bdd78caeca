"""Tasklist — a small multi-user task list service.

Users sign up with email and password, receive a bearer token, and manage
their own tasks over a JSON API. Every task belongs to exactly one user.
"""

__version__ = "0.1.0"
