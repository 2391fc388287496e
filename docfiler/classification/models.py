from dataclasses import dataclass
from datetime import date

VALID_CATEGORIES = frozenset(
    {"tax_document", "business_document", "personal_document", "contract", "other"}
)


@dataclass(frozen=True)
class ClassificationContext:
    """Caller context embedded in the classification prompt."""

    user_name: str = "Unknown"
    upload_date: date | None = None


@dataclass(frozen=True)
class ClassificationResult:
    """Folder suggestion parsed from the AI response.

    An empty result (suggested_path is None) means the model answered but the
    answer could not be parsed.
    """

    suggested_path: str | None = None
    category: str | None = None
    confidence: float | None = None
    reasoning: str | None = None
    auto_create: bool = False

    @classmethod
    def empty(cls) -> "ClassificationResult":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.suggested_path is None

    @property
    def segments(self) -> list[str]:
        """Non-empty path components of the suggested path, in order."""
        if not self.suggested_path:
            return []
        return [part.strip() for part in self.suggested_path.split("/") if part.strip()]
