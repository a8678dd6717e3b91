"""Core persistence, schemas, validation and exceptions."""
