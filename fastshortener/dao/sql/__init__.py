from fastshortener.dao.sql.schema import metadata, urls
from fastshortener.dao.sql.short_url_sql_dao import ShortURLSQLDAO
from fastshortener.dao.sql.mixins import SQLEngineMixin


__all__ = [
    'metadata',
    'urls',
    'ShortURLSQLDAO',
    'SQLEngineMixin',
]
