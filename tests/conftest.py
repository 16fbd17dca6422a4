"""Test configuration and fixtures."""

import os

import logfire

# Required settings have no defaults; provide test values before any
# settings are loaded.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("FRONTEND_URL", "http://localhost:3000")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-key-with-at-least-32-bytes")
os.environ.setdefault("AUTH__JWT_EXPIRY_SECONDS", "3600")
os.environ.setdefault("AUTH__GOOGLE__CLIENT_ID", "test-client-id")
os.environ.setdefault("AUTH__GOOGLE__CLIENT_SECRET", "test-client-secret")
os.environ.setdefault(
    "AUTH__GOOGLE__CALLBACK_URL", "http://testserver/auth/google/callback"
)

logfire.configure(send_to_logfire=False, console=False)
