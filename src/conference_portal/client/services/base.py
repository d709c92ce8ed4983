"""Shared plumbing for the per-area API services."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from conference_portal.utils.utils import guess_mime_type


class BaseService:
    """A group of related endpoints sharing one ConferenceApiClient."""

    def __init__(self, client):
        self.client = client

    @property
    def store(self):
        return self.client.store

    @contextmanager
    def open_files(self, **paths) -> Iterator[dict]:
        """Open files for a multipart upload, keyed by form field name.

        Yields a mapping suitable for the ``files`` argument of requests.
        """
        handles = []
        try:
            files = {}
            for field, path in paths.items():
                path = Path(path)
                handle = open(path, "rb")
                handles.append(handle)
                files[field] = (path.name, handle, guess_mime_type(path))
            yield files
        finally:
            for handle in handles:
                handle.close()
