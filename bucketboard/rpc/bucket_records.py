
import json
from dataclasses import asdict
from typing import Optional
from bucketboard.bucketing.codec import (
    BUCKET_COLLECTION,
    BUCKET_KEY,
    decode_bucket_state,
    encode_bucket_state,
)
from bucketboard.bucketing.engine import BucketResolver
from bucketboard.context import RequestContext
from bucketboard.errors import InvalidInput, MissingIdentity, SerializationFailure
from bucketboard.host.base import HostRuntime
from bucketboard.host.guard import host_call
from bucketboard.observability.logging import log_event
from bucketboard.peers.base import PeerSource

RPC_ID = "get_bucket_records"

class BucketRecordsRpc:
    """
    ユーザーのバケット(コホート)を解決し、コホート+自分自身の
    リーダーボードレコードをJSONで返すRPC。
    """
    def __init__(
        self,
        leaderboard_id: str,
        bucket_size: int,
        runtime: HostRuntime,
        peer_source: PeerSource,
        resolver: Optional[BucketResolver] = None,
    ):
        if bucket_size < 1:
            raise ValueError(f"bucket_size must be positive: {bucket_size}")
        self.leaderboard_id = leaderboard_id
        self.bucket_size = bucket_size
        self.runtime = runtime
        self.peer_source = peer_source
        self.resolver = resolver or BucketResolver()

    def __call__(self, context: RequestContext, payload: str) -> str:
        if payload:
            raise InvalidInput("no input allowed")

        user_id = context.user_id
        if not user_id:
            raise MissingIdentity("no user ID in context")

        with host_call("storage_read", user_id=user_id):
            raw = self.runtime.storage_read(BUCKET_COLLECTION, BUCKET_KEY, user_id)
        current = decode_bucket_state(raw)

        with host_call("leaderboard_end_active", leaderboard_id=self.leaderboard_id):
            epoch = self.runtime.leaderboard_end_active(self.leaderboard_id)

        with host_call("peer_scan", user_id=user_id):
            state = self.resolver.resolve(user_id, self.bucket_size, current, epoch, self.peer_source)

        # 再計算した場合のみ保存する
        if state is not current:
            value = encode_bucket_state(state)
            with host_call("storage_write", user_id=user_id):
                self.runtime.storage_write(BUCKET_COLLECTION, BUCKET_KEY, user_id, value)

        owner_ids = state.peer_ids + [user_id]

        with host_call("leaderboard_records_list", leaderboard_id=self.leaderboard_id):
            records = self.runtime.leaderboard_records_list(
                self.leaderboard_id, owner_ids, limit=len(owner_ids)
            )

        try:
            encoded = json.dumps({"records": [asdict(r) for r in records]})
        except (TypeError, ValueError) as e:
            raise SerializationFailure(f"records could not be encoded: {e}") from e

        log_event("bucket_records_returned", user_id=user_id, record_count=len(records))
        return encoded
