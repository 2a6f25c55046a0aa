"""User accounts service package.

Registration, credential verification and the soft-delete lifecycle of user
records, exposed through a FastAPI application.
"""
