"""Provider access package.

Architectural role:
    Turns one question into one answer string by talking to the configured
    generative-language provider, and reports on that provider's reachability.

Module split:
    - `provider_config`: environment-driven settings and provider resolution.
    - `payloads`: provider-specific request bodies.
    - `client`: HTTP transport with a per-call deadline.
    - `extraction`: response-shape rules producing the answer text.
    - `service`: question-to-answer pipeline, including mock mode.
    - `diagnostics`: configuration report and probe request.
    - `errors`: relay error kinds and their HTTP statuses.
"""
