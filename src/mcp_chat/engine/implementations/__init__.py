from .anthropic_engine import AnthropicEngine


__all__ = ["AnthropicEngine"]
