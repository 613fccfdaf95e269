import pytest
from unittest.mock import AsyncMock, Mock

from memo_engine.domains import StorageWriteError
from memo_engine.services.selection import MemoSelection


@pytest.fixture
def mock_repository():
    repo = Mock()
    repo.delete_batch = AsyncMock(return_value=2)
    return repo


def test_toggle_selects_and_unselects():
    selection = MemoSelection()
    assert not selection.active
    assert selection.toggle("a") is True
    assert selection.toggle("b") is True
    assert selection.active
    assert selection.ids == ["a", "b"]
    assert selection.toggle("a") is False
    assert selection.ids == ["b"]
    assert "b" in selection
    assert len(selection) == 1


def test_clear():
    selection = MemoSelection()
    selection.toggle("a")
    selection.clear()
    assert not selection.active


@pytest.mark.asyncio
async def test_delete_selected(mock_repository):
    selection = MemoSelection()
    selection.toggle("a")
    selection.toggle("b")
    assert await selection.delete_selected(mock_repository) == 2
    mock_repository.delete_batch.assert_awaited_once_with({"a", "b"})
    assert not selection.active


@pytest.mark.asyncio
async def test_delete_nothing_selected(mock_repository):
    assert await MemoSelection().delete_selected(mock_repository) == 0
    mock_repository.delete_batch.assert_not_called()


@pytest.mark.asyncio
async def test_failed_delete_keeps_selection(mock_repository):
    mock_repository.delete_batch.side_effect = StorageWriteError("boom")
    selection = MemoSelection()
    selection.toggle("a")
    with pytest.raises(StorageWriteError):
        await selection.delete_selected(mock_repository)
    assert selection.ids == ["a"]
