from src.storage.client import S3BlobStore, create_blob_store, create_s3_client
from src.storage.keys import KeyPolicy, derive_object_key
from src.storage.ports import BlobStore

__all__ = [
    'BlobStore',
    'KeyPolicy',
    'S3BlobStore',
    'create_blob_store',
    'create_s3_client',
    'derive_object_key',
]
