"""LLM provider adapters.

- One adapter per vendor; each call is a single stateless HTTP POST.
- No prompt/output logging (the analysed text is user content).
- Configuration is passed in explicitly; adapters never read the environment.
"""
