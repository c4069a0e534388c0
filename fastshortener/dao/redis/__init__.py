from fastshortener.dao.redis.redis_key_schema import RedisKeySchema
from fastshortener.dao.redis.short_url_redis_dao import ShortURLRedisDAO
from fastshortener.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'ShortURLRedisDAO',
    'RedisClientMixin',
]
