
import pytest
import time
from unittest.mock import MagicMock, patch
from bucketboard.config import ConfigManager, BucketConfig

@pytest.fixture
def mock_ssm_client():
    with patch('bucketboard.config.boto3.client') as mock:
        yield mock.return_value

def test_default_values(mock_ssm_client):
    """設定が取得できない場合、デフォルト値を返すこと"""
    mock_ssm_client.get_parameters.side_effect = Exception("SSM Error")

    manager = ConfigManager()
    config = manager.get_config()

    assert config.leaderboard_id == "bucketed_weekly"
    assert config.bucket_size == 20

def test_get_config_ssm_success(mock_ssm_client):
    """SSMから設定が正しく取得できること"""
    mock_ssm_client.get_parameters.return_value = {
        'Parameters': [
            {'Name': '/bucketboard/bucket/leaderboard_id', 'Value': 'season_7'},
            {'Name': '/bucketboard/bucket/size', 'Value': '50'},
        ]
    }

    manager = ConfigManager()
    config = manager.get_config()

    assert config == BucketConfig(leaderboard_id="season_7", bucket_size=50)

    mock_ssm_client.get_parameters.assert_called_once_with(
        Names=['/bucketboard/bucket/leaderboard_id', '/bucketboard/bucket/size']
    )

def test_missing_parameter_falls_back_per_field(mock_ssm_client):
    mock_ssm_client.get_parameters.return_value = {
        'Parameters': [
            {'Name': '/bucketboard/bucket/size', 'Value': '8'},
        ]
    }

    config = ConfigManager().get_config()

    assert config.leaderboard_id == "bucketed_weekly"
    assert config.bucket_size == 8

@pytest.mark.parametrize("value", ["0", "-3", "many"])
def test_invalid_bucket_size_returns_default(mock_ssm_client, value):
    """不正なバケットサイズの場合はデフォルト設定を返すこと"""
    mock_ssm_client.get_parameters.return_value = {
        'Parameters': [
            {'Name': '/bucketboard/bucket/leaderboard_id', 'Value': 'season_7'},
            {'Name': '/bucketboard/bucket/size', 'Value': value},
        ]
    }

    config = ConfigManager().get_config()

    assert config == BucketConfig()

def test_config_caching(mock_ssm_client):
    """設定がTTL内でキャッシュされること"""
    mock_ssm_client.get_parameters.return_value = {
        'Parameters': [
            {'Name': '/bucketboard/bucket/leaderboard_id', 'Value': 'B'}
        ]
    }

    manager = ConfigManager(ttl_seconds=60)

    # 1回目
    config1 = manager.get_config()
    assert config1.leaderboard_id == "B"

    # 2回目 (直後)
    config2 = manager.get_config()
    assert config2.leaderboard_id == "B"

    # SSMは1回しか呼ばれていないはず
    assert mock_ssm_client.get_parameters.call_count == 1

def test_config_cache_expiration(mock_ssm_client):
    """TTL経過後に再取得すること"""
    mock_ssm_client.get_parameters.return_value = {'Parameters': []}

    manager = ConfigManager(ttl_seconds=0.1)

    manager.get_config()
    time.sleep(0.2) # TTL切れ待ち
    manager.get_config()

    assert mock_ssm_client.get_parameters.call_count == 2

def test_failure_is_not_cached(mock_ssm_client):
    mock_ssm_client.get_parameters.side_effect = [
        Exception("SSM Error"),
        {'Parameters': [{'Name': '/bucketboard/bucket/size', 'Value': '3'}]},
    ]

    manager = ConfigManager()

    assert manager.get_config().bucket_size == 20
    assert manager.get_config().bucket_size == 3
