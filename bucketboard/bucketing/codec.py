
import json
from typing import Optional
from bucketboard.context import BucketState
from bucketboard.errors import SerializationFailure

BUCKET_COLLECTION = "buckets"
BUCKET_KEY = "bucket"

def decode_bucket_state(raw: Optional[str]) -> BucketState:
    """
    ストレージに保存されたJSONをBucketStateに変換する。
    保存済みオブジェクトが無い場合は空の状態を返す。
    """
    if raw is None or raw == "":
        return BucketState()

    try:
        data = json.loads(raw)
    except ValueError as e:
        raise SerializationFailure(f"stored bucket is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SerializationFailure("stored bucket must be a JSON object")

    reset_epoch = data.get("resetTimeUnix", 0)
    user_ids = data.get("userIds", [])

    # boolはintのサブクラスなので明示的に弾く
    if not isinstance(reset_epoch, int) or isinstance(reset_epoch, bool):
        raise SerializationFailure(f"resetTimeUnix must be an integer: {reset_epoch!r}")
    if not isinstance(user_ids, list) or not all(isinstance(u, str) for u in user_ids):
        raise SerializationFailure("userIds must be a list of strings")

    return BucketState(reset_epoch=reset_epoch, peer_ids=list(user_ids))

def encode_bucket_state(state: BucketState) -> str:
    try:
        return json.dumps({
            "resetTimeUnix": state.reset_epoch,
            "userIds": state.peer_ids,
        })
    except (TypeError, ValueError) as e:
        raise SerializationFailure(f"bucket could not be encoded: {e}") from e
