
from dataclasses import dataclass, field
from typing import Any, Dict, List
from bucketboard.context import LeaderboardRecord
from bucketboard.host.base import HostRuntime
from bucketboard.host.guard import host_call
from bucketboard.observability.logging import log_league_reset

@dataclass
class LeagueConfig:
    top_tier_id: str = "top-tier"
    bottom_tier_id: str = "bottom-tier"
    authoritative: bool = True
    sort_order: str = "desc"
    operator: str = "inc"
    reset_schedule: str = "0 0 * * 1"  # 毎週月曜0時。解釈はホスト側
    min_players: int = 10
    movers: int = 3
    max_records: int = 100
    currency: str = "coins"
    top_reward: int = 500
    bottom_reward: int = 100

@dataclass
class LeagueResult:
    leaderboard_id: str
    promoted: List[str] = field(default_factory=list)
    relegated: List[str] = field(default_factory=list)
    rewarded: Dict[str, int] = field(default_factory=dict)

class LeagueResetHandler:
    """
    2階層リーグのリセット処理。
    上位リーグの下位movers人を降格、下位リーグの上位movers人を昇格させ、
    リセット時点で各リーグにいた全員に報酬を付与する。
    """
    def __init__(self, runtime: HostRuntime, config: LeagueConfig):
        self.runtime = runtime
        self.config = config

    def __call__(self, leaderboard_id: str, reset: int) -> LeagueResult:
        cfg = self.config
        result = LeagueResult(leaderboard_id=leaderboard_id)

        if leaderboard_id not in (cfg.top_tier_id, cfg.bottom_tier_id):
            return result

        with host_call("leaderboard_records_list", leaderboard_id=leaderboard_id):
            records = self.runtime.leaderboard_records_list(
                leaderboard_id, [], limit=cfg.max_records, expiry=reset
            )

        if len(records) >= cfg.min_players:
            if leaderboard_id == cfg.top_tier_id:
                movers = records[-cfg.movers:] if cfg.movers > 0 else []
                self._move(movers, cfg.top_tier_id, cfg.bottom_tier_id)
                result.relegated = [r.owner_id for r in movers]
            else:
                movers = records[:cfg.movers]
                self._move(movers, cfg.bottom_tier_id, cfg.top_tier_id)
                result.promoted = [r.owner_id for r in movers]

        reward = cfg.top_reward if leaderboard_id == cfg.top_tier_id else cfg.bottom_reward
        for record in records:
            with host_call("wallet_update", user_id=record.owner_id):
                self.runtime.wallet_update(record.owner_id, {cfg.currency: reward})
            result.rewarded[record.owner_id] = reward

        log_league_reset(result)
        return result

    def _move(self, records: List[LeaderboardRecord], from_id: str, to_id: str) -> None:
        # 移動先に同じスコアで書き込んでから、移動元のレコードを削除する
        for record in records:
            with host_call("leaderboard_record_write", leaderboard_id=to_id):
                self.runtime.leaderboard_record_write(
                    to_id, record.owner_id, record.username, record.score, record.subscore
                )
            with host_call("leaderboard_record_delete", leaderboard_id=from_id):
                self.runtime.leaderboard_record_delete(from_id, record.owner_id)

def init_league(runtime: HostRuntime, config: LeagueConfig) -> LeagueResetHandler:
    metadata: Dict[str, Any] = {}
    for tier_id in (config.bottom_tier_id, config.top_tier_id):
        with host_call("leaderboard_create", leaderboard_id=tier_id):
            runtime.leaderboard_create(
                tier_id,
                config.authoritative,
                config.sort_order,
                config.operator,
                config.reset_schedule,
                metadata,
            )

    handler = LeagueResetHandler(runtime, config)
    runtime.register_leaderboard_reset(handler)
    return handler
