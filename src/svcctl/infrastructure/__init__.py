"""Infrastructure layer — OS service-manager backends.

This layer depends on stdlib and platform libraries (pywin32 on Windows).
It must never import from services, commands, or output.
"""
