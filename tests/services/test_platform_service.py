# tests/services/test_platform_service.py
import pytest
from unittest.mock import MagicMock, call

from src.services.platform_service import PlatformRegistry, normalize_platform_name
from src.services.exceptions import *
from src.repositories.interfaces import IPlatformRepository
from src.database import models

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_platform_repo() -> MagicMock:
    """IPlatformRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IPlatformRepository)

@pytest.fixture
def registry(mock_platform_repo) -> PlatformRegistry:
    return PlatformRegistry(mock_platform_repo)


@pytest.mark.parametrize("raw, expected", [
    (None, None),
    ("", None),
    ("   ", None),
    ("  SCALEXIO ", "SCALEXIO"),
])
def test_normalize_platform_name(raw, expected):
    assert normalize_platform_name(raw) == expected

# ===================================================================
#  resolve_or_create 테스트
# ===================================================================
class TestResolveOrCreate:
    def test_blank_name_means_no_platform(self, registry, mock_platform_repo):
        """빈 이름은 저장소를 건드리지 않고 None을 반환합니다."""
        assert registry.resolve_or_create("  ") is None
        mock_platform_repo.find_by_name.assert_not_called()
        mock_platform_repo.insert_if_absent.assert_not_called()

    def test_existing_platform(self, registry, mock_platform_repo):
        """이미 있는 이름은 INSERT 없이 기존 ID를 반환합니다."""
        mock_platform_repo.find_by_name.return_value = models.Platform(id=7, name="SCALEXIO")

        assert registry.resolve_or_create(" SCALEXIO ") == 7
        mock_platform_repo.find_by_name.assert_called_once_with("SCALEXIO")
        mock_platform_repo.insert_if_absent.assert_not_called()

    def test_new_platform_is_created_and_read_back(self, registry, mock_platform_repo):
        """새 이름은 INSERT 후 다시 읽어서 ID를 반환합니다."""
        # === Arrange ===
        mock_platform_repo.find_by_name.side_effect = [None, models.Platform(id=11, name="Delta")]
        mock_platform_repo.insert_if_absent.return_value = True

        # === Act ===
        platform_id = registry.resolve_or_create("Delta")

        # === Assert ===
        assert platform_id == 11
        mock_platform_repo.insert_if_absent.assert_called_once_with("Delta")
        assert mock_platform_repo.find_by_name.call_args_list == [call("Delta"), call("Delta", for_update=True)]

    def test_lost_insert_race_returns_winner_id(self, registry, mock_platform_repo):
        """동시에 다른 호출자가 먼저 만들었다면 그 행의 ID를 그대로 받습니다."""
        mock_platform_repo.find_by_name.side_effect = [None, models.Platform(id=12, name="Delta")]
        mock_platform_repo.insert_if_absent.return_value = False

        assert registry.resolve_or_create("Delta") == 12
        # 검증: 다시 읽을 때는 잠금 읽기로 다른 트랜잭션이 커밋한 행을 봄
        mock_platform_repo.find_by_name.assert_called_with("Delta", for_update=True)

    def test_missing_after_insert_is_internal_error(self, registry, mock_platform_repo):
        mock_platform_repo.find_by_name.return_value = None
        mock_platform_repo.insert_if_absent.return_value = True

        with pytest.raises(InternalError):
            registry.resolve_or_create("Delta")

# ===================================================================
#  find / list_platforms 테스트
# ===================================================================
class TestLookup:
    def test_find_never_creates(self, registry, mock_platform_repo):
        mock_platform_repo.find_by_name.return_value = None

        assert registry.find("Delta") is None
        mock_platform_repo.insert_if_absent.assert_not_called()

    def test_list_platforms(self, registry, mock_platform_repo):
        mock_platform_repo.list_all.return_value = [
            models.Platform(id=9, name="PHS"),
            models.Platform(id=7, name="SCALEXIO"),
        ]

        assert registry.list_platforms() == [
            {"id": 9, "name": "PHS"},
            {"id": 7, "name": "SCALEXIO"},
        ]
