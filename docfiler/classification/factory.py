from docfiler.classification.base import BaseClassifier
from docfiler.classification.classifier import Classifier
from docfiler.classification.example_client_adapter import ExampleClientAdapter
from docfiler.classification.openai_client_adapter import OpenAIClientAdapter
from docfiler.config.settings import Settings


class ClassifierFactory:
    """Creates the configured classifier adapter."""

    SUPPORTED_PROVIDERS = ("example", "openai")

    @classmethod
    def create(cls, settings: Settings) -> BaseClassifier:
        """Create a configured classifier from application settings."""
        provider = settings.classification_provider.lower()
        if provider == "example":
            return Classifier(client=ExampleClientAdapter(), model="example", temperature=0.0)
        if provider == "openai":
            client = OpenAIClientAdapter(
                api_key=settings.openai_api_key,
                timeout_seconds=settings.openai_timeout_seconds,
            )
            return Classifier(
                client=client,
                model=settings.openai_model_name,
                temperature=settings.openai_temperature,
                max_tokens=settings.openai_max_output_tokens,
            )
        raise ValueError(
            f"Unknown classification provider '{provider}'. "
            f"Choose from: {list(cls.SUPPORTED_PROVIDERS)}"
        )
