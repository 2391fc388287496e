from abc import ABC, abstractmethod


class BaseClassificationClient(ABC):
    """Contract for provider-specific classification AI clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
        file_name: str,
        file_data: bytes,
    ) -> str:
        """Return provider response as plain text."""
