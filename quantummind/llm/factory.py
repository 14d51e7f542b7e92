"""
Provider lookup by name (QUANTUMMIND_LLM_PROVIDER).
"""

from quantummind.llm import LLMProvider

PROVIDERS = ("gemini",)


def get_provider(name: str = "gemini") -> LLMProvider:
    """Build the named provider. The SDK is imported only when chosen."""
    name = name.strip().lower()
    if name == "gemini":
        from quantummind.llm.gemini import GeminiProvider
        return GeminiProvider()
    raise ValueError(f"Unknown LLM provider: {name!r} (known: {', '.join(PROVIDERS)})")
