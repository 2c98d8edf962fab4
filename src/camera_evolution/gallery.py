# -*- coding: utf-8 -*-
"""
Gallery stores for finished captures.

A store only supports two mutations: appending a new artifact and deleting
one by id. Entries are listed newest first.
"""

import json
import os
import uuid
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from .constants import GALLERY_INDEX


@dataclass(frozen=True)
class GalleryEntry:
    id: str
    era: str
    era_id: str
    format: str
    timestamp: int
    filename: str


def download_filename(artifact) -> str:
    """`{era_id}-{timestamp}.jpg` for JPEG captures."""
    return artifact.filename


def save_download(artifact, directory) -> str:
    """
    Write the artifact bytes into `directory` under its download name.
    An existing file is never overwritten; a `-1`, `-2`, ... suffix is added.
    """
    os.makedirs(directory, exist_ok=True)
    stem, ext = os.path.splitext(download_filename(artifact))
    counter = 0
    while True:
        name = f"{stem}-{counter}{ext}" if counter else f"{stem}{ext}"
        path = os.path.join(directory, name)
        try:
            with open(path, 'xb') as f:
                f.write(artifact.data)
            return path
        except FileExistsError:
            counter += 1


def _new_entry(artifact) -> GalleryEntry:
    return GalleryEntry(
        id=uuid.uuid4().hex,
        era=artifact.era_name,
        era_id=artifact.era_id,
        format=artifact.format_id,
        timestamp=artifact.timestamp,
        filename=artifact.filename,
    )


class GalleryStore:
    """Interface shared by the gallery implementations."""

    def append(self, artifact) -> GalleryEntry:
        raise NotImplementedError

    def delete(self, entry_id: str) -> bool:
        raise NotImplementedError

    def entries(self) -> List[GalleryEntry]:
        raise NotImplementedError

    def read(self, entry_id: str) -> bytes:
        raise NotImplementedError

    def __len__(self):
        return len(self.entries())


class InMemoryGallery(GalleryStore):
    def __init__(self):
        self._entries: List[GalleryEntry] = []
        self._data: Dict[str, bytes] = {}

    def append(self, artifact):
        entry = _new_entry(artifact)
        self._entries.insert(0, entry)
        self._data[entry.id] = artifact.data
        return entry

    def delete(self, entry_id):
        if entry_id not in self._data:
            return False
        self._entries = [e for e in self._entries if e.id != entry_id]
        del self._data[entry_id]
        return True

    def entries(self):
        return list(self._entries)

    def read(self, entry_id):
        try:
            return self._data[entry_id]
        except KeyError:
            raise KeyError(f"No gallery entry {entry_id!r}") from None


class JsonGallery(GalleryStore):
    """
    Directory-backed gallery: one image file per capture plus a JSON index.

    The index file is removed once the last photo is deleted. A corrupt
    index is reported through `_log` and treated as an empty gallery.
    """

    def __init__(self, directory, _log=print):
        self.directory = str(directory)
        self._log = _log
        os.makedirs(self.directory, exist_ok=True)
        self._entries = self._load()

    @property
    def index_path(self):
        return os.path.join(self.directory, GALLERY_INDEX)

    def _load(self):
        if not os.path.exists(self.index_path):
            return []
        try:
            with open(self.index_path, 'r', encoding='utf-8') as f:
                return [GalleryEntry(**item) for item in json.load(f)]
        except (OSError, ValueError, TypeError) as e:
            self._log(f"❌ Failed to load gallery: {e}")
            return []

    def _save(self):
        if not self._entries:
            if os.path.exists(self.index_path):
                os.remove(self.index_path)
            return
        tmp_path = f"{self.index_path}.tmp"
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump([asdict(e) for e in self._entries], f, indent=2)
        os.replace(tmp_path, self.index_path)

    def _image_path(self, entry):
        return os.path.join(self.directory, f"{entry.id}-{entry.filename}")

    def _find(self, entry_id) -> Optional[GalleryEntry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def append(self, artifact):
        entry = _new_entry(artifact)
        with open(self._image_path(entry), 'wb') as f:
            f.write(artifact.data)
        self._entries.insert(0, entry)
        self._save()
        return entry

    def delete(self, entry_id):
        entry = self._find(entry_id)
        if entry is None:
            return False
        self._entries.remove(entry)
        self._save()
        image_path = self._image_path(entry)
        if os.path.exists(image_path):
            os.remove(image_path)
        return True

    def entries(self):
        return list(self._entries)

    def read(self, entry_id):
        entry = self._find(entry_id)
        if entry is None:
            raise KeyError(f"No gallery entry {entry_id!r}")
        with open(self._image_path(entry), 'rb') as f:
            return f.read()
