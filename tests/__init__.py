"""Unit tests for the Language Translator V3 client.

Tests use pytest with asyncio support. Network calls are replaced by a recording transport,
and the aiohttp transport is exercised against a local aiohttp test server.
"""
