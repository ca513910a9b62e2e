"""Identity API: user registration, authentication and security audit trail."""

__version__ = "0.1.0"
