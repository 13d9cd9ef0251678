import asyncio
from contextlib import closing
import logging
from typing import Any, Callable, TypeVar

import boto3
from botocore.client import BaseClient
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from src.common.exceptions import BlobNotFoundError, BlobStoreError
from src.config import StorageSettings, settings


logger = logging.getLogger('app')

T = TypeVar('T')

NOT_FOUND_CODES = frozenset({'NoSuchKey', 'NotFound', '404'})
BUCKET_EXISTS_CODES = frozenset({
    'BucketAlreadyOwnedByYou',
    'BucketAlreadyExists',
})


def create_s3_client(storage: StorageSettings) -> BaseClient:
    """Создаёт S3 клиент для S3-совместимого хранилища.

    Path-style адресация обязательна для MinIO
    (http://host/bucket/key вместо http://bucket.host/key).
    """
    return boto3.client(
        's3',
        endpoint_url=storage.endpoint_url,
        aws_access_key_id=storage.ACCESS_KEY,
        aws_secret_access_key=storage.SECRET_KEY,
        region_name=storage.REGION,
        config=BotoConfig(
            signature_version='s3v4',
            s3={'addressing_style': 'path'},
            connect_timeout=storage.CONNECT_TIMEOUT,
            read_timeout=storage.READ_TIMEOUT,
        ),
    )


def _error_code(error: ClientError) -> str:
    return str(error.response.get('Error', {}).get('Code', ''))


class S3BlobStore:
    """Хранилище объектов в одном бакете S3/MinIO.

    Блокирующие вызовы boto3 выполняются в пуле потоков.
    """

    def __init__(self, client: BaseClient, bucket: str) -> None:
        self.client = client
        self.bucket = bucket

    async def _run(
        self,
        operation: str,
        key: str,
        func: Callable[..., T],
        **kwargs: Any,
    ) -> T:
        try:
            return await asyncio.to_thread(func, **kwargs)
        except ClientError as e:
            code = _error_code(e)
            if code in NOT_FOUND_CODES:
                raise BlobNotFoundError(
                    f'Объект {key} не найден в бакете {self.bucket}',
                ) from e
            raise BlobStoreError(
                f'S3 {operation} {self.bucket}/{key} завершился ошибкой {code}',
            ) from e
        except BotoCoreError as e:
            raise BlobStoreError(
                f'S3 {operation} {self.bucket}/{key} недоступен: {e}',
            ) from e

    async def put(self, key: str, data: bytes, content_type: str) -> None:
        """Сохраняет объект, перезаписывая существующий."""
        params: dict[str, Any] = {
            'Bucket': self.bucket,
            'Key': key,
            'Body': data,
        }
        if content_type:
            params['ContentType'] = content_type
        await self._run('put', key, self.client.put_object, **params)

    async def get(self, key: str) -> bytes:
        """Читает объект целиком."""
        def read() -> bytes:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            with closing(response['Body']) as body:
                return body.read()

        return await self._run('get', key, read)

    async def delete(self, key: str) -> None:
        """Удаляет объект. Отсутствующий ключ не считается ошибкой."""
        await self._run(
            'delete',
            key,
            self.client.delete_object,
            Bucket=self.bucket,
            Key=key,
        )

    async def ensure_bucket(self) -> None:
        """Создаёт бакет, если его ещё нет."""
        params: dict[str, Any] = {'Bucket': self.bucket}
        region = self.client.meta.region_name
        if region and region != 'us-east-1':
            params['CreateBucketConfiguration'] = {
                'LocationConstraint': region,
            }
        try:
            await asyncio.to_thread(self.client.create_bucket, **params)
        except ClientError as e:
            if _error_code(e) not in BUCKET_EXISTS_CODES:
                raise BlobStoreError(
                    f'Не удалось создать бакет {self.bucket}',
                ) from e
            logger.info(
                'Бакет %s уже существует',
                self.bucket,
                extra={'component': 'storage'},
            )
        except BotoCoreError as e:
            raise BlobStoreError(
                f'Хранилище недоступно при создании бакета {self.bucket}',
            ) from e
        else:
            logger.info(
                'Создан бакет %s',
                self.bucket,
                extra={'component': 'storage'},
            )


def create_blob_store(storage: StorageSettings = settings.storage) -> S3BlobStore:
    """Создаёт хранилище объектов по настройкам."""
    return S3BlobStore(create_s3_client(storage), storage.BUCKET)
