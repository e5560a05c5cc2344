
from typing import Any, Callable, Dict, List, Optional, Protocol
from bucketboard.context import LeaderboardRecord, RequestContext

RpcFunction = Callable[[RequestContext, str], str]
LeaderboardResetFunction = Callable[[str, int], Any]

class HostRuntime(Protocol):
    """
    ゲームサーバー本体が提供する機能。
    ストレージ、リーダーボード、ウォレットの実装はホスト側の責務。
    """

    def storage_read(self, collection: str, key: str, user_id: str) -> Optional[str]:
        ...

    def storage_write(self, collection: str, key: str, user_id: str, value: str) -> None:
        ...

    def leaderboard_end_active(self, leaderboard_id: str) -> int:
        """リーダーボードの現在のアクティブ期間の終了時刻(unix秒)"""
        ...

    def leaderboard_create(
        self,
        leaderboard_id: str,
        authoritative: bool,
        sort_order: str,
        operator: str,
        reset_schedule: str,
        metadata: Dict[str, Any],
    ) -> None:
        ...

    def leaderboard_records_list(
        self,
        leaderboard_id: str,
        owner_ids: List[str],
        limit: int,
        expiry: int = 0,
    ) -> List[LeaderboardRecord]:
        """
        owner_idsが空なら順位順に全体から、そうでなければ指定オーナーのレコードを返す。
        """
        ...

    def leaderboard_record_write(
        self,
        leaderboard_id: str,
        owner_id: str,
        username: str,
        score: int,
        subscore: int,
    ) -> LeaderboardRecord:
        ...

    def leaderboard_record_delete(self, leaderboard_id: str, owner_id: str) -> None:
        ...

    def wallet_update(self, user_id: str, changeset: Dict[str, int]) -> None:
        ...

    def register_rpc(self, rpc_id: str, fn: RpcFunction) -> None:
        ...

    def register_leaderboard_reset(self, fn: LeaderboardResetFunction) -> None:
        ...
