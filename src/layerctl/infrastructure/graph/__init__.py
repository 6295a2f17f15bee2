"""Dependency graph construction over scanned units."""
