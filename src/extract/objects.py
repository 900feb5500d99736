"""Content objects emitted by the git extractors."""

from __future__ import annotations

import msgspec

from core_types import OriginTag

SOURCE_TYPE = "seekret-source-git"

METADATA_COMMIT = "commit"
METADATA_UNIQ_ID = "uniq-id"
METADATA_STATUS = "status"
STATUS_STAGED = "staged"


class MetadataValue(msgspec.Struct, frozen=True):
    """A metadata value plus its attribute flags."""

    value: str
    primary_key: bool = False


class ContentObject(msgspec.Struct, frozen=True):
    """One extracted artifact plus provenance metadata.

    ``metadata`` keeps insertion order. Entries flagged ``primary_key`` are
    advisory deduplication keys; nothing in this package enforces them.
    """

    id: str
    origin_tag: OriginTag
    payload: bytes
    metadata: dict[str, MetadataValue] = msgspec.field(default_factory=dict)
    source_type: str = SOURCE_TYPE

    def metadata_value(self, key: str) -> str | None:
        """Return the raw metadata value for ``key``.

        Returns
        -------
        str | None
            Metadata value, or None when absent.
        """
        entry = self.metadata.get(key)
        return None if entry is None else entry.value

    def primary_keys(self) -> dict[str, str]:
        """Return metadata entries flagged as primary keys.

        Returns
        -------
        dict[str, str]
            Primary-key metadata entries in insertion order.
        """
        return {key: entry.value for key, entry in self.metadata.items() if entry.primary_key}


class TraversalIssue(msgspec.Struct, frozen=True):
    """A tolerated failure while walking one commit's tree."""

    commit: str
    path: str | None
    error_type: str
    message: str


def commit_message_object(commit_id: str, message: bytes) -> ContentObject:
    """Build the content object for a commit message.

    Returns
    -------
    ContentObject
        Commit message object keyed ``commit-<hash>``.
    """
    return ContentObject(
        id=f"commit-{commit_id}",
        origin_tag=OriginTag.COMMIT_MESSAGE,
        payload=message,
        metadata={METADATA_COMMIT: MetadataValue(commit_id)},
    )


def commit_file_object(path: str, data: bytes, *, commit_id: str, blob_id: str) -> ContentObject:
    """Build the content object for a blob seen in a commit tree.

    Returns
    -------
    ContentObject
        File content object carrying the commit and blob ids.
    """
    return ContentObject(
        id=path,
        origin_tag=OriginTag.FILE_CONTENT,
        payload=data,
        metadata={
            METADATA_COMMIT: MetadataValue(commit_id),
            METADATA_UNIQ_ID: MetadataValue(blob_id, primary_key=True),
        },
    )


def staged_file_object(path: str, data: bytes) -> ContentObject:
    """Build the content object for a staged index entry.

    Returns
    -------
    ContentObject
        File content object tagged with ``status=staged``.
    """
    return ContentObject(
        id=path,
        origin_tag=OriginTag.FILE_CONTENT,
        payload=data,
        metadata={METADATA_STATUS: MetadataValue(STATUS_STAGED)},
    )


__all__ = [
    "METADATA_COMMIT",
    "METADATA_STATUS",
    "METADATA_UNIQ_ID",
    "SOURCE_TYPE",
    "STATUS_STAGED",
    "ContentObject",
    "MetadataValue",
    "TraversalIssue",
    "commit_file_object",
    "commit_message_object",
    "staged_file_object",
]
