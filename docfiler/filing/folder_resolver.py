from dataclasses import dataclass

from docfiler.filing.folder_matcher import find_best_match
from docfiler.logging.logger import Log
from docfiler.zoho.models import RemoteFolder
from docfiler.zoho.workdrive import ZohoWorkDriveClient

NO_MATCHING_FOLDER = "No matching folder found"


@dataclass(frozen=True)
class Resolved:
    folder_id: str


@dataclass(frozen=True)
class ResolutionFailure:
    segment: str
    depth: int
    reason: str = NO_MATCHING_FOLDER


Resolution = Resolved | ResolutionFailure


class FolderResolver:
    """Walks a folder path one segment at a time below an account root folder."""

    def __init__(
        self,
        workdrive: ZohoWorkDriveClient,
        *,
        match_threshold: float,
        auto_create_enabled: bool = False,
    ) -> None:
        self._workdrive = workdrive
        self._match_threshold = match_threshold
        self._auto_create_enabled = auto_create_enabled

    def resolve(
        self,
        root_folder_id: str,
        segments: list[str],
        *,
        fuzzy: bool = True,
        create_missing: bool = False,
    ) -> Resolution:
        """Resolve every segment in order, stopping at the first one that fails.

        Purely numeric segments (years) must match a folder name exactly.
        Missing folders are created only when both create_missing is requested
        and auto-creation is enabled for this resolver.
        """
        if not segments:
            return ResolutionFailure(segment="", depth=0)

        folder_id = root_folder_id
        for depth, segment in enumerate(segments):
            folder = self.find_folder(folder_id, segment, fuzzy=fuzzy and not segment.isdigit())
            if folder is None and create_missing and self._auto_create_enabled:
                folder = self._workdrive.create_folder(folder_id, segment)
            if folder is None:
                Log.info(f"No folder matching '{segment}' under {folder_id}")
                return ResolutionFailure(segment=segment, depth=depth)
            Log.debug(f"Segment '{segment}' resolved to '{folder.name}' ({folder.id})")
            folder_id = folder.id
        return Resolved(folder_id=folder_id)

    def find_folder(
        self,
        parent_id: str,
        name: str,
        *,
        fuzzy: bool = True,
    ) -> RemoteFolder | None:
        """Find one child folder of parent_id by name.

        Exact mode compares case-insensitively; fuzzy mode takes the most
        similar name at or above the match threshold.
        """
        folders = self._workdrive.list_folders(parent_id)
        if not folders:
            return None

        if not fuzzy:
            wanted = name.lower()
            return next((f for f in folders if f.name.lower() == wanted), None)

        match = find_best_match(name, [f.name for f in folders], self._match_threshold)
        return None if match is None else folders[match.index]
