
import random
import uuid
from typing import Iterable, List, Optional, Set
from bucketboard.context import BucketState, NULL_USER_ID
from bucketboard.observability.logging import log_bucket_resolved
from bucketboard.peers.base import PeerSource

class BucketResolver:
    def __init__(self, seed: Optional[int] = None, null_id: str = NULL_USER_ID):
        self.rng = random.Random(seed)
        self.null_id = null_id

    def random_pivot(self) -> str:
        # UUID4の形をした値。スキャン開始位置としてのみ使い、実在のIDではない
        return str(uuid.UUID(int=self.rng.getrandbits(128), version=4))

    def resolve(
        self,
        user_id: str,
        cohort_size: int,
        current: BucketState,
        epoch: int,
        peer_source: PeerSource,
    ) -> BucketState:
        """
        Bucket resolution:
        Returns the user's cohort for the given leaderboard epoch.

        A stored state computed for the same epoch with at least one peer is
        returned as-is (same object, no peer source queries). Otherwise a new
        cohort is drawn with a keyset scan after a random pivot, topped up
        from the start of the identifier order when the scan runs short.

        Args:
            user_id: requesting user, never part of its own cohort
            cohort_size: target number of peers, excluding self
            current: state loaded from storage (empty if none)
            epoch: the leaderboard's current active period end
            peer_source: identifier universe to draw peers from

        Returns:
            BucketState with reset_epoch == epoch. It may hold fewer than
            cohort_size peers when the population is too small.
        """
        if cohort_size < 1:
            raise ValueError(f"cohort_size must be positive: {cohort_size}")

        if current.reset_epoch == epoch and current.peer_ids:
            log_bucket_resolved(user_id, current, recomputed=False)
            return current

        excluded = {user_id, self.null_id}
        collected: List[str] = []
        seen: Set[str] = set()

        # Overscan by the ids that may be filtered out (self, null id, already collected)
        scan_limit = cohort_size + len(excluded)

        pivot = self.random_pivot()
        self._collect(peer_source.scan_after(pivot, scan_limit), cohort_size, excluded, collected, seen)

        # Not enough users after the pivot, wrap around to the start
        if len(collected) < cohort_size:
            self._collect(peer_source.scan_first(scan_limit), cohort_size, excluded, collected, seen)

        state = BucketState(reset_epoch=epoch, peer_ids=collected)
        log_bucket_resolved(user_id, state, recomputed=True)
        return state

    @staticmethod
    def _collect(
        ids: Iterable[str],
        cohort_size: int,
        excluded: Set[str],
        collected: List[str],
        seen: Set[str],
    ) -> None:
        for peer_id in ids:
            if len(collected) >= cohort_size:
                break
            if peer_id in excluded or peer_id in seen:
                continue
            collected.append(peer_id)
            seen.add(peer_id)

def resolve_bucket(
    user_id: str,
    cohort_size: int,
    current: BucketState,
    epoch: int,
    peer_source: PeerSource,
    seed: Optional[int] = None,
) -> BucketState:
    return BucketResolver(seed=seed).resolve(user_id, cohort_size, current, epoch, peer_source)
