
class BucketboardError(Exception):
    """RPC呼び出し元に返すエラーの基底クラス"""

class InvalidInput(BucketboardError):
    pass

class MissingIdentity(BucketboardError):
    pass

class SerializationFailure(BucketboardError):
    pass

class DependencyFailure(BucketboardError):
    """
    ストレージ/クエリ/リーダーボード操作の失敗。
    リトライはしない。元の例外は __cause__ に保持される。
    """
