"""Safety package.

Helpers that keep provider credentials out of anything returned to clients or
written to logs.
"""
