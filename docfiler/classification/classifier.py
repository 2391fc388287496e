"""AI-powered document classifier."""

import json
import math
from datetime import date
from pathlib import Path
from typing import Any

from docfiler.classification.base import BaseClassifier
from docfiler.classification.client_base import BaseClassificationClient
from docfiler.classification.models import (
    VALID_CATEGORIES,
    ClassificationContext,
    ClassificationResult,
)
from docfiler.classification.prompt_loader import (
    load_system_prompt_template,
    load_user_prompt_template,
)
from docfiler.classification.taxonomy import CATCH_ALL_FOLDER, render_taxonomy
from docfiler.logging.logger import Log
from docfiler.storage.models import StoredObject


class Classifier(BaseClassifier):
    """Asks a chat completion model where a document belongs in the taxonomy."""

    def __init__(
        self,
        *,
        client: BaseClassificationClient,
        model: str,
        temperature: float = 0.2,
        max_tokens: int = 800,
        system_prompt_path: Path | None = None,
        user_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.3, temperature))
        self._max_tokens = max_tokens
        self._system_prompt = load_system_prompt_template(system_prompt_path).format(
            taxonomy=render_taxonomy(),
            catch_all_folder=CATCH_ALL_FOLDER,
        )
        self._user_prompt_template = load_user_prompt_template(user_prompt_path)

    def classify(
        self,
        stored_object: StoredObject,
        file_name: str,
        context: ClassificationContext,
    ) -> ClassificationResult:
        user_prompt = self._user_prompt_template.format(
            file_name=file_name,
            user_name=context.user_name,
            upload_date=(context.upload_date or date.today()).isoformat(),
        )
        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            system_prompt=self._system_prompt,
            user_prompt=user_prompt,
            file_name=file_name,
            file_data=stored_object.data,
        )
        Log.debug(f"AI raw response for '{file_name}':\n{raw_response}")

        parsed = parse_response(raw_response)
        if parsed is None:
            Log.warning(f"Unparsable classification response for '{file_name}'")
            return ClassificationResult.empty()

        result = build_result(parsed)
        Log.info(
            f"Classified '{file_name}' as {result.category} -> {result.suggested_path} "
            f"(confidence {result.confidence})"
        )
        return result


def parse_response(raw: str) -> dict[str, Any] | None:
    """Strip code fences and parse a JSON object; None if that fails."""
    cleaned = raw.replace("```json", "").replace("```", "").strip()
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed


def build_result(data: dict[str, Any]) -> ClassificationResult:
    suggested_path = data.get("suggested_path")
    if not isinstance(suggested_path, str) or not suggested_path.strip():
        suggested_path = None
    category = data.get("category")
    reasoning = data.get("reasoning")
    return ClassificationResult(
        suggested_path=suggested_path,
        category=category if category in VALID_CATEGORIES else None,
        confidence=_coerce_confidence(data.get("confidence")),
        reasoning=reasoning if isinstance(reasoning, str) else None,
        auto_create=data.get("auto_create") is True,
    )


def _coerce_confidence(raw: Any) -> float | None:
    if isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(value):
        return None
    return max(0.0, min(1.0, value))
