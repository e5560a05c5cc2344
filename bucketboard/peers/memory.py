
import bisect
from typing import Iterable, List
from bucketboard.peers.base import PeerSource

class SortedPeerSource(PeerSource):
    """
    プロセス内に保持したユーザーIDの集合をPeerSourceとして扱う。
    IDは文字列の昇順で保持する。
    """
    def __init__(self, ids: Iterable[str] = ()):
        self._ids: List[str] = sorted(set(ids))

    def add(self, user_id: str) -> None:
        idx = bisect.bisect_left(self._ids, user_id)
        if idx < len(self._ids) and self._ids[idx] == user_id:
            return
        self._ids.insert(idx, user_id)

    def __len__(self) -> int:
        return len(self._ids)

    def scan_after(self, pivot: str, limit: int) -> List[str]:
        if limit <= 0:
            return []
        start = bisect.bisect_right(self._ids, pivot)
        return self._ids[start:start + limit]

    def scan_first(self, limit: int) -> List[str]:
        if limit <= 0:
            return []
        return self._ids[:limit]
