"""Service layer — business logic returning ControlResult.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
