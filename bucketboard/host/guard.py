
import logging
from contextlib import contextmanager
from typing import Any, Iterator
from bucketboard.errors import BucketboardError, DependencyFailure
from bucketboard.observability.logging import log_event

@contextmanager
def host_call(operation: str, **fields: Any) -> Iterator[None]:
    """
    ホスト/外部依存の呼び出しで発生した例外をDependencyFailureに変換する。
    すでに分類済みのBucketboardErrorはそのまま通す。
    """
    try:
        yield
    except BucketboardError:
        raise
    except Exception as e:
        log_event("dependency_failed", level=logging.ERROR, operation=operation, error=repr(e), **fields)
        raise DependencyFailure(f"{operation} failed: {e}") from e
