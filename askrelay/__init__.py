"""askrelay: single-endpoint question relay for generative-language providers."""
