"""Offline classification client adapter.

Returns a fixed answer without network calls. Useful for local development
and as a template for new provider adapters: implement
BaseClassificationClient and register the provider in ClassifierFactory.
"""

import json
from typing import ClassVar

from docfiler.classification.client_base import BaseClassificationClient
from docfiler.classification.taxonomy import CATCH_ALL_FOLDER


class ExampleClientAdapter(BaseClassificationClient):
    """Adapter that files every document under the catch-all folder."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "suggested_path": f"{CATCH_ALL_FOLDER}/Prep Checklists",
        "category": "other",
        "confidence": 0.5,
        "reasoning": "Offline example classification",
        "auto_create": False,
    }

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
        _ = model, temperature, max_tokens, system_prompt, user_prompt, file_name, file_data
        return json.dumps(self.DEFAULT_RESPONSE)
