"""Command-line surface of realm-cli.

Owns argument parsing, prompts, terminal output and the exit-code
mapping.  ``core`` and ``infra`` never import from here.
"""
