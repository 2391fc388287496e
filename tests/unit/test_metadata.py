import pytest

from docfiler.filing.metadata import (
    LINKAGE_KEY,
    DocumentMetadata,
    MetadataError,
    StorageLinkage,
)


def _raw() -> dict[str, object]:
    return {
        "user": {"id": 7, "given_name": "Dana"},
        "account_id": 4455001,
        "file": {"originalname": "w2.pdf"},
        "source": "portal",
    }


class TestFromJson:
    def test_reads_input_context(self) -> None:
        metadata = DocumentMetadata.from_json(_raw())
        assert metadata.context.account_id == "4455001"
        assert metadata.context.user_id == "7"
        assert metadata.context.user_name == "Dana"
        assert metadata.linkage is None

    def test_missing_user_defaults_to_unknown(self) -> None:
        metadata = DocumentMetadata.from_json({"account_id": "1"})
        assert metadata.context.user_name == "Unknown"
        assert metadata.context.user_id is None

    def test_blank_account_id_is_none(self) -> None:
        assert DocumentMetadata.from_json({"account_id": ""}).context.account_id is None

    def test_reads_existing_linkage(self) -> None:
        raw = _raw()
        raw[LINKAGE_KEY] = {"parent_id": "p1", "file_id": "f1", "permalink": "https://x"}
        metadata = DocumentMetadata.from_json(raw)
        assert metadata.linkage == StorageLinkage(
            parent_id="p1", file_id="f1", permalink="https://x"
        )

    def test_rejects_non_object(self) -> None:
        with pytest.raises(MetadataError, match="JSON object"):
            DocumentMetadata.from_json(["not", "a", "dict"])

    def test_rejects_non_object_user(self) -> None:
        with pytest.raises(MetadataError, match="metadata.user"):
            DocumentMetadata.from_json({"user": "dana"})


class TestToJson:
    def test_appends_linkage_and_preserves_other_keys(self) -> None:
        metadata = DocumentMetadata.from_json(_raw()).with_linkage(
            StorageLinkage(parent_id="folder-3", file_id="res-9", permalink="https://wd/res-9")
        )
        data = metadata.to_json()
        assert data["account_id"] == 4455001
        assert data["source"] == "portal"
        assert data[LINKAGE_KEY] == {
            "parent_id": "folder-3",
            "file_id": "res-9",
            "permalink": "https://wd/res-9",
        }

    def test_does_not_mutate_input(self) -> None:
        raw = _raw()
        DocumentMetadata.from_json(raw).with_linkage(
            StorageLinkage(parent_id="p", file_id="f")
        ).to_json()
        assert LINKAGE_KEY not in raw
