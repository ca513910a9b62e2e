"""Self-contained helper libraries with no database or HTTP dependencies."""
