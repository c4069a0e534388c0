"""Relational schema for short URL mappings.

    urls
    ├── id            UUID, primary key
    ├── original_url  TEXT, not null (stored verbatim)
    ├── uri           VARCHAR(32), not null, unique index idx_urls_uri
    ├── raw_json      JSON request metadata (agent, referer)
    ├── created       TIMESTAMPTZ, not null, default now()
    └── updated       TIMESTAMPTZ, not null, default now()
"""

import uuid

from sqlalchemy import JSON, Column, DateTime, Index, MetaData, String, Table, Text, Uuid, func


metadata = MetaData()

urls = Table(
    'urls',
    metadata,
    Column('id', Uuid, primary_key=True, default=uuid.uuid4),
    Column('original_url', Text, nullable=False),
    Column('uri', String(length=32), nullable=False),
    Column('raw_json', JSON, nullable=True),
    Column('created', DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column('updated', DateTime(timezone=True), nullable=False, server_default=func.now()),
    Index('idx_urls_uri', 'uri', unique=True),
)
