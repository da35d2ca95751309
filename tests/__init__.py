"""
Test suite for the Voisia backend.

Unit tests cover wire shapes, the catalog, provider clients and the command
facade; integration tests drive the FastAPI app in-process.
"""
