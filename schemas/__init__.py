"""Request body and query string schemas."""
