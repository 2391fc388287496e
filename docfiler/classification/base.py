from abc import ABC, abstractmethod

from docfiler.classification.models import ClassificationContext, ClassificationResult
from docfiler.storage.models import StoredObject


class BaseClassifier(ABC):
    """Contract for all classification adapters."""

    @abstractmethod
    def classify(
        self,
        stored_object: StoredObject,
        file_name: str,
        context: ClassificationContext,
    ) -> ClassificationResult:
        """Suggest a destination folder path for a document.

        Returns:
            ClassificationResult; ClassificationResult.empty() when the model
            output cannot be parsed.

        Raises:
            ClassificationError: if the completion call itself fails.
        """
