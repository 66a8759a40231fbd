"""
Google Sheets async client.

Wraps common Sheets API v4 calls (read/write rows, clear cells, copy,
rename and delete sheets) so call sites don't repeat request boilerplate.
"""
import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from google.auth.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from loguru import logger

from google_sheets_utils.config.settings import get_settings
from google_sheets_utils.services.sheets.auth import AuthConfig, resolve_credentials
from google_sheets_utils.services.sheets.exceptions import SheetNotFoundError


class SheetsClient:
    """
    Async Google Sheets API client.

    Uses ThreadPoolExecutor to make sync Google API calls async.

    Create it with SheetsClient.create() to resolve credentials first, or
    pass already resolved credentials to the constructor.
    """

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        service: Any = None,
        max_workers: Optional[int] = None
    ):
        """
        Args:
            credentials: Resolved google-auth credentials
            service: Prebuilt Sheets v4 resource. Built from credentials if omitted.
            max_workers: Executor threads. Defaults to settings.MAX_WORKERS.
        """
        if service is None:
            if credentials is None:
                raise ValueError("Either credentials or service is required")
            service = build("sheets", "v4", credentials=credentials, cache_discovery=False)

        self._service = service
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or get_settings().MAX_WORKERS
        )

    @classmethod
    async def create(cls, auth_config: Optional[AuthConfig] = None) -> "SheetsClient":
        """
        Authenticate and create a new client.

        Use get_instance() if you need a shared instance.

        Args:
            auth_config: Authentication options. Defaults come from settings;
                         default scope is https://www.googleapis.com/auth/spreadsheets

        Raises:
            AuthenticationError: If credentials cannot be resolved
        """
        settings = get_settings()
        auth_config = auth_config or AuthConfig.from_settings(settings)

        loop = asyncio.get_event_loop()
        credentials = await loop.run_in_executor(None, resolve_credentials, auth_config)

        client = cls(credentials=credentials, max_workers=settings.MAX_WORKERS)
        logger.info(f"Google Sheets client initialized, scopes={auth_config.scopes}")
        return client

    @property
    def api(self) -> Any:
        """Raw Sheets v4 resource for calls not wrapped here."""
        return self._service

    # ========================================================================
    # LOW-LEVEL OPERATIONS
    # ========================================================================

    async def _run_sync(self, func, *args, **kwargs) -> Any:
        """Run synchronous function in executor."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(
            self._executor,
            lambda: func(*args, **kwargs)
        )

    async def _batch_update(self, file_id: str, requests: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Send structural update requests (spreadsheets.batchUpdate).

        Args:
            file_id: Spreadsheet ID
            requests: List of Request objects

        Returns:
            API response
        """
        def _batch():
            return self._service.spreadsheets().batchUpdate(
                spreadsheetId=file_id,
                body={"requests": requests}
            ).execute()

        try:
            result = await self._run_sync(_batch)
            logger.debug(f"Batch updated {file_id}: {[next(iter(r)) for r in requests]}")
            return result
        except HttpError as e:
            logger.error(f"Error in batch update of {file_id}: {e}")
            raise

    async def _get_sheets_properties(self, file_id: str) -> List[Dict[str, Any]]:
        """Get properties of every sheet in the file, in service order."""
        def _get_metadata():
            return self._service.spreadsheets().get(
                spreadsheetId=file_id,
                fields="sheets.properties"
            ).execute()

        try:
            result = await self._run_sync(_get_metadata)
        except HttpError as e:
            logger.error(f"Error getting sheets metadata for {file_id}: {e}")
            raise

        return [sheet.get("properties", {}) for sheet in result.get("sheets", [])]

    # ========================================================================
    # ROWS
    # ========================================================================

    async def get_rows_from_sheet(self, file_id: str, range: str = "A1") -> List[List[Any]]:
        """
        Read values from a range.

        Args:
            file_id: Spreadsheet ID
            range: Range in A1 notation. Default is A1.

        Returns:
            2D list of values, empty if the range has no values
        """
        def _read():
            return self._service.spreadsheets().values().get(
                spreadsheetId=file_id,
                range=range
            ).execute()

        try:
            result = await self._run_sync(_read)
        except HttpError as e:
            logger.error(f"Error reading range {range} of {file_id}: {e}")
            raise

        return result.get("values") or []

    async def save_rows_to_sheet(
        self,
        file_id: str,
        rows: List[List[Any]],
        range: str = "Sheet1!A1"
    ) -> None:
        """
        Write rows starting at the given cell.

        Values are parsed as if typed by a user (USER_ENTERED), so formulas
        and numbers are interpreted by Sheets.

        Args:
            file_id: Spreadsheet ID
            rows: 2D list of values
            range: Range to start from. Default is Sheet1!A1.
        """
        def _update():
            return self._service.spreadsheets().values().update(
                spreadsheetId=file_id,
                range=range,
                valueInputOption="USER_ENTERED",
                body={"values": rows}
            ).execute()

        try:
            await self._run_sync(_update)
            logger.debug(f"Saved {len(rows)} rows to {range} of {file_id}")
        except HttpError as e:
            logger.error(f"Error updating {range} of {file_id}: {e}")
            raise

    async def save_row_to_sheet(
        self,
        file_id: str,
        values: List[Any],
        range: str = "Sheet1!A1"
    ) -> None:
        """Write a single row starting at the given cell."""
        await self.save_rows_to_sheet(file_id, [values], range)

    # ========================================================================
    # SHEET LOOKUP
    # ========================================================================

    async def get_first_sheet_id(self, file_id: str) -> Optional[int]:
        """
        Get the ID of the sheet at index 0.

        Returns:
            Sheet ID or None if the file has no sheets
        """
        for props in await self._get_sheets_properties(file_id):
            if props.get("index", 0) == 0:
                return props.get("sheetId")
        return None

    async def get_sheet_id_by_title(self, file_id: str, title: str) -> Optional[int]:
        """
        Get the sheet ID (gid) by sheet title.

        Titles are matched exactly; the first match wins.

        Returns:
            Sheet ID or None if not found
        """
        for props in await self._get_sheets_properties(file_id):
            if props.get("title") == title:
                return props.get("sheetId")
        return None

    async def _require_sheet_id(self, file_id: str, title: str) -> int:
        sheet_id = await self.get_sheet_id_by_title(file_id, title)
        if sheet_id is None:
            raise SheetNotFoundError(title)
        return sheet_id

    async def _require_first_sheet_id(self, file_id: str) -> int:
        sheet_id = await self.get_first_sheet_id(file_id)
        if sheet_id is None:
            raise SheetNotFoundError()
        return sheet_id

    # ========================================================================
    # SHEET LIFECYCLE
    # ========================================================================

    async def copy_sheet(self, file_id: str, sheet_id: int, destination_file_id: str) -> None:
        """
        Copy a sheet to another spreadsheet.

        Args:
            file_id: Source spreadsheet ID
            sheet_id: Source sheet ID
            destination_file_id: Destination spreadsheet ID
        """
        def _copy():
            return self._service.spreadsheets().sheets().copyTo(
                spreadsheetId=file_id,
                sheetId=sheet_id,
                body={"destinationSpreadsheetId": destination_file_id}
            ).execute()

        try:
            await self._run_sync(_copy)
            logger.info(f"Copied sheet {sheet_id} of {file_id} to {destination_file_id}")
        except HttpError as e:
            logger.error(f"Error copying sheet {sheet_id} of {file_id}: {e}")
            raise

    async def copy_sheet_by_title(
        self,
        file_id: str,
        sheet_title: str,
        destination_file_id: str
    ) -> None:
        """
        Copy the sheet with the given title to another spreadsheet.

        Raises:
            SheetNotFoundError: If no sheet has this title
        """
        sheet_id = await self._require_sheet_id(file_id, sheet_title)
        await self.copy_sheet(file_id, sheet_id, destination_file_id)

    async def rename_sheet_by_id(self, file_id: str, sheet_id: int, new_title: str) -> None:
        """Rename a sheet. Cell data is not touched."""
        await self._batch_update(file_id, [{
            "updateSheetProperties": {
                "properties": {
                    "sheetId": sheet_id,
                    "title": new_title
                },
                "fields": "title"
            }
        }])
        logger.info(f"Renamed sheet {sheet_id} of {file_id} to '{new_title}'")

    async def rename_sheet_by_title(self, file_id: str, current_title: str, new_title: str) -> None:
        """
        Find the sheet with the given title and rename it.

        Raises:
            SheetNotFoundError: If no sheet has current_title
        """
        sheet_id = await self._require_sheet_id(file_id, current_title)
        await self.rename_sheet_by_id(file_id, sheet_id, new_title)

    async def delete_sheet_by_id(self, file_id: str, sheet_id: int) -> None:
        """Delete a sheet and all its contents."""
        await self._batch_update(file_id, [{
            "deleteSheet": {
                "sheetId": sheet_id
            }
        }])
        logger.info(f"Deleted sheet {sheet_id} of {file_id}")

    async def delete_sheet_by_title(self, file_id: str, title: str) -> None:
        """
        Find the sheet with the given title and delete it.

        Raises:
            SheetNotFoundError: If no sheet has this title
        """
        sheet_id = await self._require_sheet_id(file_id, title)
        await self.delete_sheet_by_id(file_id, sheet_id)

    # ========================================================================
    # FIRST SHEET HELPERS
    # ========================================================================

    async def clear_first_sheet(
        self,
        file_id: str,
        start_row_index: int = 1,
        start_column_index: int = 1
    ) -> None:
        """
        Clear entered values on the first sheet.

        Clears from (start_row_index, start_column_index) to the sheet edge.
        Formatting and notes are kept.

        Args:
            file_id: Spreadsheet ID
            start_row_index: Start from row (0-based). Default is 1.
            start_column_index: Start from column (0-based). Default is 1.
        """
        sheet_id = await self._require_first_sheet_id(file_id)

        # See: https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/cells
        await self._batch_update(file_id, [{
            "updateCells": {
                "range": {
                    "sheetId": sheet_id,
                    "startRowIndex": start_row_index,
                    "startColumnIndex": start_column_index
                },
                "fields": "userEnteredValue"
            }
        }])

    async def set_rows_height(self, file_id: str, height: int, start_row_index: int = 1) -> None:
        """
        Set the height of rows on the first sheet.

        Args:
            file_id: Spreadsheet ID
            height: Row height in pixels
            start_row_index: Starting row (0-based). Default is 1.
        """
        sheet_id = await self._require_first_sheet_id(file_id)

        await self._batch_update(file_id, [{
            "updateDimensionProperties": {
                "range": {
                    "sheetId": sheet_id,
                    "dimension": "ROWS",
                    "startIndex": start_row_index
                },
                "properties": {
                    "pixelSize": height
                },
                "fields": "pixelSize"
            }
        }])

    async def close(self) -> None:
        """Cleanup resources."""
        self._executor.shutdown(wait=False)
        logger.info("Google Sheets client closed")
