"""Business logic layer for users app.

User records are Django's ``auth.User`` rows whose username is the
email address, so email uniqueness is enforced by the database.
"""
