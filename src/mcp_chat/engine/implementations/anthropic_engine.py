import logging
from typing import Any, Callable, Dict, List, Optional

import anthropic
from anthropic import AsyncAnthropic
from pydantic import ValidationError

from ...exceptions import ProviderError
from ..base import BaseEngine
from ..models import CompletionResponse, ProviderMessage, ProviderTool


class AnthropicEngine(BaseEngine):
    def __init__(self, config: Dict[str, Any], logger: Optional[logging.Logger] = None):
        self.api_key = config.get("api_key")
        self.llm_model = config.get("llm_model", "claude-3-5-sonnet-20241022")
        self.max_tokens = config.get("max_tokens", 1024)
        self.logger = logger or logging.getLogger("AnthropicEngine")

        client_kwargs: Dict[str, Any] = {"api_key": self.api_key}
        if config.get("base_url"):
            client_kwargs["base_url"] = config["base_url"]
        self.client = AsyncAnthropic(**client_kwargs)

    def _build_request(
        self,
        messages: List[ProviderMessage],
        tools: Optional[List[ProviderTool]],
    ) -> Dict[str, Any]:
        request: Dict[str, Any] = {
            "model": self.llm_model,
            "max_tokens": self.max_tokens,
            "messages": [message.model_dump() for message in messages],
        }
        # No tools key at all when the catalog is empty
        if tools:
            request["tools"] = [tool.model_dump() for tool in tools]
        return request

    def _decode(self, response: Any) -> CompletionResponse:
        payload = response.model_dump() if hasattr(response, "model_dump") else response
        return CompletionResponse.model_validate(payload)

    async def send_message(
        self,
        messages: List[ProviderMessage],
        tools: Optional[List[ProviderTool]] = None,
    ) -> CompletionResponse:
        request = self._build_request(messages, tools)
        self.logger.debug(
            f"Sending {len(messages)} messages to {self.llm_model} "
            f"with {len(request.get('tools', []))} tools"
        )
        try:
            response = await self.client.messages.create(**request)
            return self._decode(response)
        except anthropic.APIError as e:
            self.logger.error(f"Completion request failed: {e}")
            raise ProviderError(f"Completion request failed: {e}") from e
        except ValidationError as e:
            self.logger.error(f"Could not decode completion response: {e}")
            raise ProviderError(f"Could not decode completion response: {e}") from e

    async def stream_message(
        self,
        messages: List[ProviderMessage],
        on_chunk: Callable[[str], None],
        tools: Optional[List[ProviderTool]] = None,
    ) -> CompletionResponse:
        request = self._build_request(messages, tools)
        self.logger.debug(f"Streaming {len(messages)} messages to {self.llm_model}")
        try:
            async with self.client.messages.stream(**request) as stream:
                async for text in stream.text_stream:
                    on_chunk(text)
                final_message = await stream.get_final_message()
            return self._decode(final_message)
        except anthropic.APIError as e:
            self.logger.error(f"Streaming completion failed: {e}")
            raise ProviderError(f"Streaming completion failed: {e}") from e
        except ValidationError as e:
            self.logger.error(f"Could not decode streamed response: {e}")
            raise ProviderError(f"Could not decode streamed response: {e}") from e

    async def aclose(self) -> None:
        await self.client.close()
