from docfiler.classification.base import BaseClassifier
from docfiler.classification.classifier import Classifier
from docfiler.classification.factory import ClassifierFactory
from docfiler.classification.models import ClassificationContext, ClassificationResult

__all__ = [
    "BaseClassifier",
    "ClassificationContext",
    "ClassificationResult",
    "Classifier",
    "ClassifierFactory",
]
