
from dataclasses import dataclass, field
from typing import Optional, List

# 番兵ID。コホートには決して含めない
NULL_USER_ID = "00000000-0000-0000-0000-000000000000"

@dataclass
class BucketState:
    reset_epoch: int = 0
    peer_ids: List[str] = field(default_factory=list)  # 自分自身は含まない

@dataclass
class LeaderboardRecord:
    owner_id: str
    username: str = ""
    score: int = 0
    subscore: int = 0
    rank: Optional[int] = None

@dataclass
class RequestContext:
    user_id: Optional[str]
