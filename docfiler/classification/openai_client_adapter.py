import httpx
import openai

from docfiler.classification.client_base import BaseClassificationClient
from docfiler.classification.exceptions import (
    ClassificationError,
    ClassificationNetworkError,
)
from docfiler.logging.logger import Log

_NETWORK_ERRORS = (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException)


class OpenAIClientAdapter(BaseClassificationClient):
    """Classification client built on the OpenAI files and chat completions APIs.

    The document is uploaded once through the Files API and referenced from the
    user message, so the model reads the original file rather than extracted text.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        uploaded = None
        try:
            uploaded = self._client.files.create(
                file=(file_name, file_data),
                purpose="user_data",
            )
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": user_prompt},
                            {"type": "file", "file": {"file_id": uploaded.id}},
                        ],
                    },
                ],
            )
        except _NETWORK_ERRORS as exc:
            raise ClassificationNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise ClassificationNetworkError(
                f"AI provider API error: {exc}"
            ) from exc
        finally:
            if uploaded is not None:
                self._delete_file(uploaded.id)

        if not response.choices:
            raise ClassificationError("AI returned no choices")
        return response.choices[0].message.content or ""

    def _delete_file(self, file_id: str) -> None:
        try:
            self._client.files.delete(file_id)
        except openai.OpenAIError as exc:
            Log.warning(f"Could not delete uploaded file {file_id}: {exc}")
