"""Storage Module - blob stores for uploaded files."""
from storage.blob_store import (
    BlobStore,
    LocalBlobStore,
    SupabaseBlobStore,
    build_blob_store,
    resume_blob_path,
)

__all__ = [
    'BlobStore',
    'LocalBlobStore',
    'SupabaseBlobStore',
    'build_blob_store',
    'resume_blob_path',
]
