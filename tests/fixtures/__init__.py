"""Test fixture package for announcer.

Contains fixtures for:
- Feed documents and entries
- A fake feed host and Slack API behind httpx.MockTransport
- The FastAPI application wired to those fakes
"""
