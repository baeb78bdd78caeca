"""Authentication.

Learn: One authentication path: email/password → bcrypt check → JWT
bearer token. Every protected route resolves the token to a
CurrentIdentity through the auth gate in dependencies.py, and all task
queries are scoped by that identity's user_id.
"""
