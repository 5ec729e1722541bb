"""Core of the Language Translator V3 client.

This package contains the service façade, the request assembly pipeline and the transport contract.
The façade lives in ``core.translator.language_translator_v3``.
"""

from core.version import VERSION

__all__: list[str] = ["VERSION"]
