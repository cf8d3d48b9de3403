from .base import BaseUpstream
from .gemini import GeminiAdapter

__all__ = ["BaseUpstream", "GeminiAdapter"]
