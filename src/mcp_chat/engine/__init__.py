from .base import BaseEngine
from .factory import EngineFactory
from .models import CompletionResponse, ContentBlock, ProviderMessage, ProviderTool

__all__ = [
    "BaseEngine",
    "EngineFactory",
    "CompletionResponse",
    "ContentBlock",
    "ProviderMessage",
    "ProviderTool",
]
