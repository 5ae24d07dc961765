from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from .models import CompletionResponse, ProviderMessage, ProviderTool


class BaseEngine(ABC):
    @abstractmethod
    async def send_message(
        self,
        messages: List[ProviderMessage],
        tools: Optional[List[ProviderTool]] = None,
    ) -> CompletionResponse:
        pass

    @abstractmethod
    async def stream_message(
        self,
        messages: List[ProviderMessage],
        on_chunk: Callable[[str], None],
        tools: Optional[List[ProviderTool]] = None,
    ) -> CompletionResponse:
        pass

    async def aclose(self) -> None:
        pass
