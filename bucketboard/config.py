
import time
import logging
import boto3
from dataclasses import dataclass
from typing import Optional

from bucketboard.observability.logging import log_event

PARAM_LEADERBOARD_ID = '/bucketboard/bucket/leaderboard_id'
PARAM_BUCKET_SIZE = '/bucketboard/bucket/size'

DEFAULT_LEADERBOARD_ID = "bucketed_weekly"
DEFAULT_BUCKET_SIZE = 20

@dataclass
class BucketConfig:
    leaderboard_id: str = DEFAULT_LEADERBOARD_ID
    bucket_size: int = DEFAULT_BUCKET_SIZE

class ConfigManager:
    def __init__(self, ttl_seconds: float = 60.0):
        self.ttl_seconds = ttl_seconds
        self._cached_config: Optional[BucketConfig] = None
        self._last_fetched_at: float = 0.0
        self._ssm_client = boto3.client('ssm')

    def get_config(self) -> BucketConfig:
        current_time = time.time()

        if self._cached_config and (current_time - self._last_fetched_at < self.ttl_seconds):
            return self._cached_config

        try:
            config = self._fetch_from_ssm()
            self._cached_config = config
            self._last_fetched_at = current_time
            return config
        except Exception as e:
            log_event("config_fetch_failed", level=logging.WARNING, error=repr(e))
            return self._get_default_config()

    def _fetch_from_ssm(self) -> BucketConfig:
        names = [PARAM_LEADERBOARD_ID, PARAM_BUCKET_SIZE]

        response = self._ssm_client.get_parameters(Names=names)
        params = {p['Name']: p['Value'] for p in response.get('Parameters', [])}

        leaderboard_id = params.get(PARAM_LEADERBOARD_ID, DEFAULT_LEADERBOARD_ID)

        # 不正な値はValueErrorとしてget_config側でデフォルトに倒す
        bucket_size = int(params.get(PARAM_BUCKET_SIZE, str(DEFAULT_BUCKET_SIZE)))
        if bucket_size < 1:
            raise ValueError(f"bucket size must be positive: {bucket_size}")

        return BucketConfig(
            leaderboard_id=leaderboard_id,
            bucket_size=bucket_size,
        )

    def _get_default_config(self) -> BucketConfig:
        return BucketConfig(
            leaderboard_id=DEFAULT_LEADERBOARD_ID,
            bucket_size=DEFAULT_BUCKET_SIZE,
        )
