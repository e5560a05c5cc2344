
import time
from typing import Optional
from bucketboard.bucketing.engine import BucketResolver
from bucketboard.config import ConfigManager
from bucketboard.host.base import HostRuntime
from bucketboard.league.tiers import LeagueConfig, init_league
from bucketboard.observability.logging import log_event
from bucketboard.peers.base import PeerSource
from bucketboard.rpc.bucket_records import RPC_ID, BucketRecordsRpc

def init_module(
    runtime: HostRuntime,
    config_manager: ConfigManager,
    peer_source: PeerSource,
    league_config: Optional[LeagueConfig] = None,
    resolver: Optional[BucketResolver] = None,
) -> BucketRecordsRpc:
    """
    バケットRPCとリーグのリセット処理をホストに登録する。
    """
    init_start = time.monotonic()

    config = config_manager.get_config()
    rpc = BucketRecordsRpc(
        leaderboard_id=config.leaderboard_id,
        bucket_size=config.bucket_size,
        runtime=runtime,
        peer_source=peer_source,
        resolver=resolver,
    )
    runtime.register_rpc(RPC_ID, rpc)

    init_league(runtime, league_config or LeagueConfig())

    elapsed_ms = int((time.monotonic() - init_start) * 1000)
    log_event("module_loaded", elapsed_ms=elapsed_ms, leaderboard_id=config.leaderboard_id)
    return rpc
