
import pytest
from sqlalchemy import Column, MetaData, String, Table, create_engine, insert
from sqlalchemy.exc import SQLAlchemyError
from bucketboard.peers.sql import SqlPeerSource, metadata, users_table

@pytest.fixture
def engine(user_ids):
    engine = create_engine("sqlite://")
    metadata.create_all(engine)
    with engine.begin() as conn:
        # 挿入順はソート順と異なるようにする
        conn.execute(insert(users_table), [{"id": u} for u in reversed(user_ids)])
    yield engine
    engine.dispose()

def test_scan_after_keyset(engine, user_ids):
    source = SqlPeerSource(engine)
    assert source.scan_after(user_ids[4], 3) == user_ids[5:8]

def test_scan_after_past_end(engine, user_ids):
    source = SqlPeerSource(engine)
    assert source.scan_after(user_ids[-1], 3) == []

def test_scan_first(engine, user_ids):
    source = SqlPeerSource(engine)
    assert source.scan_first(4) == user_ids[:4]

def test_non_positive_limit(engine):
    source = SqlPeerSource(engine)
    assert source.scan_first(0) == []
    assert source.scan_after("", -1) == []

def test_database_error_propagates():
    engine = create_engine("sqlite://")
    missing = Table("players", MetaData(), Column("id", String(36), primary_key=True))
    source = SqlPeerSource(engine, table=missing)

    with pytest.raises(SQLAlchemyError):
        source.scan_first(5)
