from http import HTTPStatus

import pytest

from src.config import MAX_FILE_SIZE


PAYLOAD = bytes([0x01, 0x02, 0x03])


def upload(name: str = 'a.png', data: bytes = PAYLOAD, ctype: str = 'image/png'):
    return {'image': (name, data, ctype)}


@pytest.mark.asyncio
async def test_health(client):  # noqa
    response = await client.get('/health')

    assert response.status_code == HTTPStatus.OK
    assert response.headers['content-type'].startswith('text/plain')
    assert response.text == 'System is Running'


@pytest.mark.asyncio
async def test_list_empty_is_json_array(client):  # noqa
    response = await client.get('/images')

    assert response.status_code == HTTPStatus.OK
    assert response.json() == []


@pytest.mark.asyncio
async def test_upload_returns_record(client):  # noqa
    response = await client.post('/images', files=upload())

    assert response.status_code == HTTPStatus.OK
    body = response.json()
    assert body['id'] == 1
    assert body['filename'] == 'a.png'
    assert body['size'] == 3
    assert body['object_key'] == 'a.png'
    assert body['content_type'] == 'image/png'
    assert 'created_at' in body

    listing = await client.get('/images')
    assert listing.json() == [body]


@pytest.mark.asyncio
async def test_upload_without_file_is_bad_request(client):  # noqa
    response = await client.post('/images', data={'other': 'value'})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json()['code'] == HTTPStatus.BAD_REQUEST


@pytest.mark.asyncio
async def test_upload_empty_file_is_bad_request(client, blobs):  # noqa
    response = await client.post('/images', files=upload(data=b''))

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert blobs.put_calls == []


@pytest.mark.asyncio
async def test_upload_too_large(client, blobs):  # noqa
    response = await client.post(
        '/images',
        files=upload(data=b'\0' * (MAX_FILE_SIZE + 1)),
    )

    assert response.status_code == HTTPStatus.REQUEST_ENTITY_TOO_LARGE
    assert blobs.put_calls == []


@pytest.mark.asyncio
async def test_upload_storage_failure(client, blobs):  # noqa
    blobs.fail_put = True

    response = await client.post('/images', files=upload())

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert (await client.get('/images')).json() == []


@pytest.mark.asyncio
async def test_upload_metadata_failure(client, blobs, metadata):  # noqa
    metadata.fail_insert = True

    response = await client.post('/images', files=upload())

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert blobs.delete_calls == ['a.png']


@pytest.mark.asyncio
async def test_list_failure(client, metadata):  # noqa
    metadata.fail_list = True

    response = await client.get('/images')

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR


@pytest.mark.asyncio
async def test_download(client):  # noqa
    await client.post('/images', files=upload())

    response = await client.get('/download/1')

    assert response.status_code == HTTPStatus.OK
    assert response.content == PAYLOAD
    assert response.headers['content-type'] == 'image/png'
    assert (
        response.headers['content-disposition']
        == 'attachment; filename="a.png"'
    )


@pytest.mark.asyncio
async def test_download_non_ascii_key(client):  # noqa
    await client.post('/images', files=upload(name='фото.png'))

    response = await client.get('/download/1')

    assert response.status_code == HTTPStatus.OK
    assert response.headers['content-disposition'].startswith(
        "attachment; filename*=utf-8''",
    )


@pytest.mark.asyncio
async def test_download_missing(client):  # noqa
    response = await client.get('/download/1')

    assert response.status_code == HTTPStatus.NOT_FOUND


@pytest.mark.asyncio
async def test_download_invalid_id(client):  # noqa
    response = await client.get('/download/abc')

    assert response.status_code == HTTPStatus.BAD_REQUEST


@pytest.mark.asyncio
async def test_download_dangling_reference(client, blobs):  # noqa
    await client.post('/images', files=upload())
    blobs.objects.clear()

    response = await client.get('/download/1')

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR


@pytest.mark.asyncio
async def test_delete(client, blobs):  # noqa
    await client.post('/images', files=upload())

    response = await client.delete('/images/1')

    assert response.status_code == HTTPStatus.NO_CONTENT
    assert response.content == b''
    assert blobs.objects == {}
    assert (await client.get('/images')).json() == []
    assert (await client.get('/download/1')).status_code == HTTPStatus.NOT_FOUND


@pytest.mark.asyncio
async def test_delete_missing(client):  # noqa
    response = await client.delete('/images/999')

    assert response.status_code == HTTPStatus.NOT_FOUND


@pytest.mark.asyncio
async def test_delete_invalid_id(client):  # noqa
    response = await client.delete('/images/not-a-number')

    assert response.status_code == HTTPStatus.BAD_REQUEST


@pytest.mark.asyncio
async def test_delete_storage_failure(client, blobs):  # noqa
    await client.post('/images', files=upload())
    blobs.fail_delete = True

    response = await client.delete('/images/1')

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert len((await client.get('/images')).json()) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    'image_id',
    ['99999999999999999999', '2147483648', '0', '-1'],
)
async def test_download_out_of_range_id(client, image_id):  # noqa
    response = await client.get(f'/download/{image_id}')

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json()['code'] == HTTPStatus.BAD_REQUEST


@pytest.mark.asyncio
@pytest.mark.parametrize('image_id', ['99999999999999999999', '2147483648', '0'])
async def test_delete_out_of_range_id(client, blobs, image_id):  # noqa
    response = await client.delete(f'/images/{image_id}')

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert blobs.delete_calls == []


@pytest.mark.asyncio
async def test_largest_id_is_not_found(client):  # noqa
    response = await client.get('/download/2147483647')

    assert response.status_code == HTTPStatus.NOT_FOUND


@pytest.mark.asyncio
async def test_upload_unwrapped_metadata_error(client, blobs, metadata):  # noqa
    metadata.fail_insert = True
    metadata.error = ConnectionRefusedError

    response = await client.post('/images', files=upload())

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.json()['code'] == HTTPStatus.INTERNAL_SERVER_ERROR
    assert blobs.delete_calls == ['a.png']
