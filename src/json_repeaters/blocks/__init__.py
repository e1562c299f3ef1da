"""Repeater type definitions and their registry."""
