
import json
import logging
from typing import Any
from bucketboard.context import BucketState

logger = logging.getLogger("bucketboard")
logger.setLevel(logging.INFO)
# Handler設定はホスト環境に依存するため、ここでは標準出力への出力のみを想定
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter('%(message)s'))
logger.addHandler(handler)

def log_event(event: str, level: int = logging.INFO, **fields: Any):
    """
    イベントを構造化ログ(JSON)として出力する。
    """
    log_data = {"event": event, **fields}
    logger.log(level, json.dumps(log_data, default=str))

def log_bucket_resolved(user_id: str, state: BucketState, recomputed: bool):
    log_event(
        "bucket_resolved",
        user_id=user_id,
        reset_epoch=state.reset_epoch,
        recomputed=recomputed,
        peer_count=len(state.peer_ids),
    )

def log_league_reset(result: Any):
    log_event(
        "league_reset",
        leaderboard_id=result.leaderboard_id,
        promoted=result.promoted,
        relegated=result.relegated,
        rewarded=len(result.rewarded),
    )
