"""Infrastructure layer — async file and HTTP I/O.

Modules here translate low-level exceptions into :mod:`streamspike.errors`.
They must never import from services, commands, or output.
"""
