"""Unit tests for billing default resolution."""

from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.models.reference import GeneralStatus
from app.services.reference_service import ReferenceService, get_billing_defaults

MODULE = "app.services.reference_service"


@pytest.mark.asyncio
async def test_unpaid_status_resolved_by_name():
    db = AsyncMock(spec=AsyncSession)

    with patch(f"{MODULE}.settings.UNPAID_STATUS_ID", None), \
            patch(f"{MODULE}.ReferenceService.get_status_by_name", new_callable=AsyncMock) as mock_by_name:
        mock_by_name.return_value = GeneralStatus(id=4, name="Belum Dibayar", published_at=datetime(2025, 1, 1))

        defaults = await ReferenceService.resolve_defaults(db)

    mock_by_name.assert_awaited_once_with(db, "Belum Dibayar")
    assert defaults.unpaid_status_id == 4
    assert defaults.paid_status_id == 6
    assert defaults.category_id == 1


@pytest.mark.asyncio
async def test_falls_back_to_first_published_status():
    db = AsyncMock(spec=AsyncSession)

    with patch(f"{MODULE}.settings.UNPAID_STATUS_ID", None), \
            patch(f"{MODULE}.ReferenceService.get_status_by_name", new_callable=AsyncMock) as mock_by_name, \
            patch(f"{MODULE}.ReferenceService.get_first_published_status", new_callable=AsyncMock) as mock_first:
        mock_by_name.return_value = None
        mock_first.return_value = GeneralStatus(id=1, name="Draft", published_at=datetime(2025, 1, 1))

        defaults = await ReferenceService.resolve_defaults(db)

    assert defaults.unpaid_status_id == 1


@pytest.mark.asyncio
async def test_no_status_at_all_is_not_found():
    db = AsyncMock(spec=AsyncSession)

    with patch(f"{MODULE}.settings.UNPAID_STATUS_ID", None), \
            patch(f"{MODULE}.ReferenceService.get_status_by_name", new_callable=AsyncMock) as mock_by_name, \
            patch(f"{MODULE}.ReferenceService.get_first_published_status", new_callable=AsyncMock) as mock_first:
        mock_by_name.return_value = None
        mock_first.return_value = None

        with pytest.raises(NotFoundError):
            await ReferenceService.resolve_defaults(db)


@pytest.mark.asyncio
async def test_configured_status_id_skips_lookup():
    db = AsyncMock(spec=AsyncSession)

    with patch(f"{MODULE}.settings.UNPAID_STATUS_ID", 9), \
            patch(f"{MODULE}.ReferenceService.get_status_by_name", new_callable=AsyncMock) as mock_by_name:
        defaults = await ReferenceService.resolve_defaults(db)

    assert defaults.unpaid_status_id == 9
    mock_by_name.assert_not_called()


@pytest.mark.asyncio
async def test_defaults_resolved_once_per_process():
    db = AsyncMock(spec=AsyncSession)

    with patch(f"{MODULE}.settings.UNPAID_STATUS_ID", 9), \
            patch(f"{MODULE}.ReferenceService.resolve_defaults", wraps=ReferenceService.resolve_defaults) as spy:
        first = await get_billing_defaults(db)
        second = await get_billing_defaults(db)

    assert first is second
    assert spy.call_count == 1
