
from typing import List, Optional
from sqlalchemy import Column, MetaData, String, Table, select
from sqlalchemy.engine import Engine
from bucketboard.peers.base import PeerSource

metadata = MetaData()

users_table = Table(
    "users",
    metadata,
    Column("id", String(36), primary_key=True),
)

class SqlPeerSource(PeerSource):
    """
    usersテーブルに対するKEYSETスキャン。
    ORDER BY を明示して、1回の計算の中で順序が安定するようにする。
    DBエラー(SQLAlchemyError)はそのまま呼び出し元に伝播させる。
    """
    def __init__(self, engine: Engine, table: Optional[Table] = None):
        self.engine = engine
        self.table = table if table is not None else users_table

    def scan_after(self, pivot: str, limit: int) -> List[str]:
        if limit <= 0:
            return []
        id_col = self.table.c.id
        stmt = select(id_col).where(id_col > pivot).order_by(id_col).limit(limit)
        return self._fetch_ids(stmt)

    def scan_first(self, limit: int) -> List[str]:
        if limit <= 0:
            return []
        id_col = self.table.c.id
        stmt = select(id_col).order_by(id_col).limit(limit)
        return self._fetch_ids(stmt)

    def _fetch_ids(self, stmt) -> List[str]:
        with self.engine.connect() as conn:
            return [str(user_id) for user_id in conn.execute(stmt).scalars()]
