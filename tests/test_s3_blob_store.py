import io

import boto3
from botocore.response import StreamingBody
from botocore.stub import Stubber
import pytest

from src.common.exceptions import BlobNotFoundError, BlobStoreError
from src.config import StorageSettings
from src.storage.client import S3BlobStore, create_s3_client
from src.storage.keys import derive_object_key


BUCKET = 'images'


@pytest.fixture
def s3_client():
    return boto3.client(
        's3',
        region_name='us-east-1',
        aws_access_key_id='test',
        aws_secret_access_key='test',
    )


@pytest.fixture
def stubber(s3_client):
    with Stubber(s3_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def store(s3_client) -> S3BlobStore:
    return S3BlobStore(s3_client, BUCKET)


@pytest.mark.asyncio
async def test_put_sends_content_type(store, stubber):  # noqa
    stubber.add_response(
        'put_object',
        {},
        {
            'Bucket': BUCKET,
            'Key': 'a.png',
            'Body': b'\x01\x02',
            'ContentType': 'image/png',
        },
    )

    await store.put('a.png', b'\x01\x02', 'image/png')


@pytest.mark.asyncio
async def test_put_without_content_type(store, stubber):  # noqa
    stubber.add_response(
        'put_object',
        {},
        {'Bucket': BUCKET, 'Key': 'a.bin', 'Body': b'\x01'},
    )

    await store.put('a.bin', b'\x01', '')


@pytest.mark.asyncio
async def test_get_reads_body(store, stubber):  # noqa
    stubber.add_response(
        'get_object',
        {'Body': StreamingBody(io.BytesIO(b'abc'), 3)},
        {'Bucket': BUCKET, 'Key': 'a.png'},
    )

    assert await store.get('a.png') == b'abc'


@pytest.mark.asyncio
async def test_get_missing_key(store, stubber):  # noqa
    stubber.add_client_error(
        'get_object',
        service_error_code='NoSuchKey',
        http_status_code=404,
    )

    with pytest.raises(BlobNotFoundError):
        await store.get('missing.png')


@pytest.mark.asyncio
async def test_put_failure_is_wrapped(store, stubber):  # noqa
    stubber.add_client_error(
        'put_object',
        service_error_code='InternalError',
        http_status_code=500,
    )

    with pytest.raises(BlobStoreError) as exc_info:
        await store.put('a.png', b'\x01', 'image/png')

    assert not isinstance(exc_info.value, BlobNotFoundError)


@pytest.mark.asyncio
async def test_delete(store, stubber):  # noqa
    stubber.add_response(
        'delete_object',
        {},
        {'Bucket': BUCKET, 'Key': 'a.png'},
    )

    await store.delete('a.png')


@pytest.mark.asyncio
async def test_ensure_bucket_creates(store, stubber):  # noqa
    stubber.add_response('create_bucket', {}, {'Bucket': BUCKET})

    await store.ensure_bucket()


@pytest.mark.asyncio
async def test_ensure_bucket_tolerates_existing(store, stubber):  # noqa
    stubber.add_client_error(
        'create_bucket',
        service_error_code='BucketAlreadyOwnedByYou',
        http_status_code=409,
    )

    await store.ensure_bucket()


@pytest.mark.asyncio
async def test_ensure_bucket_fails_on_access_denied(store, stubber):  # noqa
    stubber.add_client_error(
        'create_bucket',
        service_error_code='AccessDenied',
        http_status_code=403,
    )

    with pytest.raises(BlobStoreError):
        await store.ensure_bucket()


def test_client_uses_path_style_endpoint():  # noqa
    storage = StorageSettings(ENDPOINT='minio:9000', REGION='us-east-1')

    client = create_s3_client(storage)

    assert client.meta.endpoint_url == 'http://minio:9000'
    assert client.meta.config.s3['addressing_style'] == 'path'


def test_endpoint_url_keeps_explicit_scheme():  # noqa
    storage = StorageSettings(ENDPOINT='https://s3.example.com')

    assert storage.endpoint_url == 'https://s3.example.com'


def test_filename_policy_reuses_name():  # noqa
    assert derive_object_key('dir/a.png', 'filename') == 'dir/a.png'


def test_unique_policy_adds_random_prefix():  # noqa
    first = derive_object_key('C:\\photos\\a.png', 'unique')
    second = derive_object_key('C:\\photos\\a.png', 'unique')

    assert first != second
    assert first.endswith('_a.png')
    assert len(first.split('_', 1)[0]) == 32
