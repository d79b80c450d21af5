"""askrelay adapter package.

Architectural role:
- Defines the external interaction boundary: HTTP server, startup and CLI client.
- Performs transport-level validation and response shaping.
- Delegates answering and diagnostics to `askrelay.llm`.
"""
