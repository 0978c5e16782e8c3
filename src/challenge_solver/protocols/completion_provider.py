"""Completion provider protocol.

Defines the interface for a chat-completion service that turns a list of
role/content messages into the model's reply text.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CompletionProvider(Protocol):
    """Protocol for chat-completion backends.

    Example:
        ```python
        provider: CompletionProvider = CompletionClient.create()
        reply = await provider.complete([{"role": "user", "content": "2+2?"}])
        ```
    """

    async def complete(self, messages: list[dict[str, str]]) -> str:
        """Send ``messages`` and return the text of the first choice.

        Args:
            messages: Chat messages as ``{"role": ..., "content": ...}`` dicts

        Returns:
            The model's reply content
        """
        ...
