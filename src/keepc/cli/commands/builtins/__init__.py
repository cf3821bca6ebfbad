"""
Built-in verbs package.

Verbs are loaded from individual subdirectories, each containing an __init__.py
that registers the handler using @verb_registry.register().
"""
