"""
Google Drive storage service for receipt images.

Find-or-create by exact file name inside the configured Drive folder. A name
that already exists is reused as-is (no overwrite, no re-upload, even when
the bytes differ): this is what keeps a resent receipt from producing a
second file across runs.
"""

import io
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from googleapiclient.http import MediaIoBaseUpload

from receipt_ledger.db import execute
from receipt_ledger.errors import ArtifactStoreFailure
from receipt_ledger.utils.constants import DEFAULT_MIME_TYPE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArtifactFromBuffer:
    """Receipt image already in memory (the normal intake path)."""
    file_name: str
    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE


@dataclass(frozen=True)
class ArtifactFromPath:
    """Receipt image on local disk (manual backfills)."""
    path: Union[str, Path]
    file_name: Optional[str] = None
    mime_type: Optional[str] = None


ArtifactInput = Union[ArtifactFromBuffer, ArtifactFromPath]


@dataclass(frozen=True)
class StoredArtifact:
    """A receipt image stored in Drive."""
    file_id: str
    link: str
    name: str
    reused: bool = False


def resolve_artifact_input(artifact: ArtifactInput) -> ArtifactFromBuffer:
    """
    Turn either input shape into an in-memory buffer.

    Called once at the boundary so the ledger writer only ever handles
    ``ArtifactFromBuffer``.
    """
    if isinstance(artifact, ArtifactFromBuffer):
        return artifact

    path = Path(artifact.path)
    mime_type = artifact.mime_type
    if not mime_type:
        mime_type, _ = mimetypes.guess_type(path.name)
    return ArtifactFromBuffer(
        file_name=artifact.file_name or path.name,
        data=path.read_bytes(),
        mime_type=mime_type or DEFAULT_MIME_TYPE,
    )


def _escape_query_value(value: str) -> str:
    """Escape a literal for a Drive ``q`` expression."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


async def find_artifact(
    drive: Any,
    file_name: str,
    folder_id: str,
) -> Optional[StoredArtifact]:
    """
    Look up a non-trashed file named exactly ``file_name`` in ``folder_id``.

    Returns:
        The existing artifact, or None if no such file exists.

    Raises:
        ArtifactStoreFailure: If the file exists but Drive omits its id or link
    """
    query = (
        f"name='{_escape_query_value(file_name)}' "
        f"and '{_escape_query_value(folder_id)}' in parents and trashed=false"
    )
    response = await execute(
        drive.files().list(
            q=query,
            fields="files(id, name, webViewLink)",
            pageSize=1,
        )
    )

    files = (response or {}).get("files") or []
    if not files:
        return None

    existing = files[0]
    if not existing.get("id") or not existing.get("webViewLink"):
        raise ArtifactStoreFailure(
            file_name, "Existing Drive file is missing its id or link"
        )

    return StoredArtifact(
        file_id=existing["id"],
        link=existing["webViewLink"],
        name=existing.get("name") or file_name,
        reused=True,
    )


async def upsert_artifact(
    drive: Any,
    file_name: str,
    data: bytes,
    mime_type: Optional[str],
    folder_id: str,
) -> StoredArtifact:
    """
    Return the Drive file named ``file_name``, uploading ``data`` only if absent.

    This function:
    1. Queries the folder for a file with exactly this name
    2. If found, returns its id and link unchanged (the bytes are ignored)
    3. Otherwise uploads the bytes from memory and returns the new id and link

    Args:
        drive: Drive v3 service
        file_name: Synthesized receipt file name (e.g. "João_Fev.jpg")
        data: Image bytes, never read from disk here
        mime_type: Image MIME type, defaults to image/jpeg
        folder_id: Drive folder holding all receipts

    Returns:
        StoredArtifact with the file id and its webViewLink

    Raises:
        ArtifactStoreFailure: If Drive returns no id or no link
        HttpError: If a Drive call fails
    """
    existing = await find_artifact(drive, file_name, folder_id)
    if existing is not None:
        logger.warning(
            f"Drive file already exists, reusing: "
            f"file_name={file_name}, file_id={existing.file_id}"
        )
        return existing

    content_type = mime_type or DEFAULT_MIME_TYPE
    logger.info(
        f"Uploading receipt image to Drive: "
        f"file_name={file_name}, size={len(data)} bytes, "
        f"content_type={content_type}"
    )

    media = MediaIoBaseUpload(io.BytesIO(data), mimetype=content_type, resumable=False)
    created = await execute(
        drive.files().create(
            body={"name": file_name, "parents": [folder_id]},
            media_body=media,
            fields="id, webViewLink",
        )
    )

    file_id = (created or {}).get("id")
    link = (created or {}).get("webViewLink")
    if not file_id or not link:
        raise ArtifactStoreFailure(file_name, "Drive upload returned no id or link")

    logger.info(f"Uploaded receipt image: file_name={file_name}, file_id={file_id}")
    return StoredArtifact(file_id=file_id, link=link, name=file_name)
