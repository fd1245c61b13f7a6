"""Output layer — serialization of the invocation result."""
