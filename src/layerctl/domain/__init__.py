"""Domain layer — layers, units, edges, and the rule table.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
