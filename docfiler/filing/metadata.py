"""Typed views over the documents.metadata JSON bag."""

from dataclasses import dataclass, field
from typing import Any

LINKAGE_KEY = "zoho_data"


class MetadataError(ValueError):
    """Raised when the metadata bag does not have the expected shape."""


@dataclass(frozen=True)
class InputContext:
    """Caller-supplied context written when the document was created."""

    user: dict[str, Any] = field(default_factory=dict)
    account_id: str | None = None
    file: Any = None

    @property
    def user_id(self) -> str | None:
        raw = self.user.get("id")
        return None if raw is None else str(raw)

    @property
    def user_name(self) -> str:
        return str(self.user.get("given_name") or "Unknown")


@dataclass(frozen=True)
class StorageLinkage:
    """Where the pipeline filed the document in remote storage."""

    parent_id: str
    file_id: str
    permalink: str | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "parent_id": self.parent_id,
            "file_id": self.file_id,
            "permalink": self.permalink,
        }


@dataclass(frozen=True)
class DocumentMetadata:
    """Input context plus optional storage linkage over the raw bag.

    Keys the pipeline does not own are written back exactly as read.
    """

    context: InputContext
    linkage: StorageLinkage | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, raw: Any) -> "DocumentMetadata":
        if not isinstance(raw, dict):
            raise MetadataError("Document metadata must be a JSON object")

        user = raw.get("user") or {}
        if not isinstance(user, dict):
            raise MetadataError("'metadata.user' must be an object")
        account_id = raw.get("account_id")
        context = InputContext(
            user=user,
            account_id=None if account_id in (None, "") else str(account_id),
            file=raw.get("file"),
        )

        linkage = None
        raw_linkage = raw.get(LINKAGE_KEY)
        if isinstance(raw_linkage, dict) and raw_linkage.get("file_id"):
            linkage = StorageLinkage(
                parent_id=str(raw_linkage.get("parent_id", "")),
                file_id=str(raw_linkage["file_id"]),
                permalink=raw_linkage.get("permalink"),
            )

        return cls(context=context, linkage=linkage, raw=dict(raw))

    def with_linkage(self, linkage: StorageLinkage) -> "DocumentMetadata":
        return DocumentMetadata(context=self.context, linkage=linkage, raw=self.raw)

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.raw)
        if self.linkage is not None:
            data[LINKAGE_KEY] = self.linkage.to_json()
        return data
