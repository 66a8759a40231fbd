from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from google_sheets_utils.config.settings import get_settings
from google_sheets_utils.services.sheets import SheetsClient

SHEETS_METADATA = {
    "sheets": [
        {"properties": {"sheetId": 111, "title": "Sheet1", "index": 0}},
        {"properties": {"sheetId": 222, "title": "Data", "index": 1}},
    ]
}


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Settings are cached; isolate each test from the environment."""
    for name in ("CREDENTIALS_FILE", "SCOPES", "QUOTA_PROJECT_ID", "MAX_WORKERS", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(f"GOOGLE_SHEETS_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def service():
    """Sheets v4 resource mock with the two-sheet scenario metadata."""
    service = MagicMock()
    service.spreadsheets.return_value.get.return_value.execute.return_value = SHEETS_METADATA
    return service


@pytest.fixture
def batch_update(service):
    return service.spreadsheets.return_value.batchUpdate


@pytest_asyncio.fixture
async def client(service):
    client = SheetsClient(service=service)
    yield client
    await client.close()
