
from typing import List, Protocol

class PeerSource(Protocol):
    def scan_after(self, pivot: str, limit: int) -> List[str]:
        """
        pivotより大きいIDを、全順序に従って最大limit件返す。
        結果が空でもエラーにしない。
        """
        ...

    def scan_first(self, limit: int) -> List[str]:
        """
        全順序の先頭から最大limit件のIDを返す。
        """
        ...
