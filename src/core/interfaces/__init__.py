"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) that concrete adapters implement.
- Lets the CLI depend on abstractions instead of the httpx adapter.
"""
