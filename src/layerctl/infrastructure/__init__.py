"""Infrastructure layer — filesystem traversal, reference parsing, graph engine.

This layer depends on stdlib and third-party libs (NetworkX, Jinja2).
It may import from domain but never from services, commands, or output.
"""
