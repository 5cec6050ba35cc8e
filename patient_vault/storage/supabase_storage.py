"""
Supabase Record Store - Reads and updates rows through the hosted PostgREST API.
"""

import httpx
from typing import Optional, List, Dict, Any

from .interface import RecordStore, StoreError, validate_table


class SupabaseRecordStore(RecordStore):
    """
    Record store backed by a Supabase project.
    Every request is scoped to a user with an eq filter on user_id.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 15.0,
    ):
        """
        Initialize the hosted store.

        Args:
            url: Project URL, e.g. https://<project>.supabase.co
            api_key: Service or anon key
            timeout: Request timeout in seconds
        """
        self.base_url = f"{url.rstrip('/')}/rest/v1"
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    async def select(
        self,
        table: str,
        user_id: str,
        order_by: Optional[str] = None,
        descending: bool = False
    ) -> List[Dict[str, Any]]:
        """GET /{table}?select=*&user_id=eq.{user_id}[&order=col.dir]"""
        params = {"select": "*", "user_id": f"eq.{user_id}"}
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"

        url = f"{self.base_url}/{validate_table(table)}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, params=params, headers=self._headers())
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            raise StoreError(f"Select from {table} failed: {e}") from e
        except ValueError as e:
            # 200 with a non-JSON body, e.g. a proxy error page
            raise StoreError(f"Select from {table} returned invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise StoreError(f"Unexpected response shape from {table}")
        return data

    async def update(
        self,
        table: str,
        row_id: str,
        values: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """PATCH /{table}?id=eq.{row_id} returning the updated representation."""
        url = f"{self.base_url}/{validate_table(table)}"
        headers = {**self._headers(), "Prefer": "return=representation"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.patch(
                    url, params={"id": f"eq.{row_id}"}, json=values, headers=headers
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            raise StoreError(f"Update of {table}/{row_id} failed: {e}") from e
        except ValueError as e:
            raise StoreError(f"Update of {table}/{row_id} returned invalid JSON: {e}") from e

        if isinstance(data, list):
            return data[0] if data else None
        return data
