from typing import Any, Dict

from .base import BaseEngine


class EngineFactory:
    @staticmethod
    def create_engine(engine_type: str, config: Dict[str, Any]) -> BaseEngine:
        if engine_type.lower() == "anthropic":
            from .implementations import AnthropicEngine
            return AnthropicEngine(config)
        else:
            raise ValueError(f"Unknown Engine type: {engine_type}")
