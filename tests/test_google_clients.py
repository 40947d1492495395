"""
Tests for GoogleClientProvider (lazy, invalidatable Sheets/Drive services).
"""

from unittest.mock import MagicMock, patch

import pytest

from receipt_ledger.db import GoogleClientProvider, execute
from receipt_ledger.db import client as client_module


@pytest.fixture
def mock_build():
    with patch.object(client_module, "build") as build:
        build.side_effect = lambda name, version, **kwargs: MagicMock(name=f"{name}-{version}")
        yield build


def test_services_are_built_once(mock_build):
    provider = GoogleClientProvider(timeout_seconds=5)

    sheets = provider.get_sheets()
    assert provider.get_sheets() is sheets
    drive = provider.get_drive()
    assert provider.get_drive() is drive

    built = [call.args[:2] for call in mock_build.call_args_list]
    assert built == [("sheets", "v4"), ("drive", "v3")]
    assert all(call.kwargs["cache_discovery"] is False for call in mock_build.call_args_list)


def test_invalidate_rebuilds_services(mock_build):
    provider = GoogleClientProvider()

    first = provider.get_sheets()
    provider.invalidate()
    second = provider.get_sheets()

    assert first is not second
    assert mock_build.call_count == 2


def test_missing_refresh_token_raises(mock_build, monkeypatch):
    monkeypatch.setattr(client_module.settings, "GOOGLE_REFRESH_TOKEN", "")
    provider = GoogleClientProvider()

    with pytest.raises(ValueError):
        provider.get_sheets()

    mock_build.assert_not_called()


def test_credentials_use_configured_scopes(mock_build):
    provider = GoogleClientProvider(refresh_token="refresh-me", client_id="cid")
    provider.get_drive()

    credentials = provider._credentials
    assert credentials.refresh_token == "refresh-me"
    assert credentials.client_id == "cid"
    assert set(credentials.scopes) == set(client_module.SCOPES)


@pytest.mark.asyncio
async def test_execute_runs_request():
    request = MagicMock()
    request.execute.return_value = {"values": [["Ana"]]}

    assert await execute(request) == {"values": [["Ana"]]}
    request.execute.assert_called_once_with()
