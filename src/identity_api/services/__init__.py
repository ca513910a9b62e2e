"""Service layer: business operations over the ORM models."""
