from __future__ import annotations
import logging
import requests
from typing import List, Dict, Any, Iterable, Optional
from core.exceptions import PBError

logger = logging.getLogger(__name__)

BLOCKS = "blocks"
TASKS = "tasks"
LIBRARY_BLOCKS = "library_blocks"
LIBRARY_TASKS = "library_tasks"
BACKLOG = "backlog"

PER_PAGE = 500


def _eq(field: str, value: Any) -> str:
    return f'{field} = "{value}"'


class PocketBaseClient:
    def __init__(self, base_url: str, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.token: Optional[str] = ""
        self.user_id: Optional[str] = ""

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, path)
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise PBError(f"{method} {path} failed: {e}") from e
        if not r.ok:
            raise PBError(f"{method} {path} failed: {r.status_code} {r.text}")
        return r

    # ---------- auth ----------
    def login(self, identity: str, password: str) -> bool:
        r = self._request("POST", "/api/collections/users/auth-with-password",
                          json={"identity": identity, "password": password})
        data = r.json()
        self.token = data.get("token")
        self.user_id = data.get("record", {}).get("id")
        if not self.token or not self.user_id:
            raise PBError("Missing token or user id in login response")
        self.session.headers.update({"Authorization": f"Bearer {self.token}"})
        return True

    # ---------- generic records ----------
    def list_records(self, collection: str, filter: Optional[str] = None,
                     sort: str = "created") -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"perPage": PER_PAGE, "sort": sort}
        if filter:
            params["filter"] = filter
        items: List[Dict[str, Any]] = []
        page = 1
        while True:
            data = self._request("GET", f"/api/collections/{collection}/records",
                                 params=dict(params, page=page)).json()
            items.extend(data.get("items", []))
            if page >= (data.get("totalPages") or 1):
                return items
            page += 1

    def create_record(self, collection: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", f"/api/collections/{collection}/records", json=payload).json()

    def create_records(self, collection: str, payloads: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        # no batch endpoint assumed; one insert per row, stops at the first failure
        return [self.create_record(collection, p) for p in payloads]

    def update_record(self, collection: str, record_id: str, **fields) -> Dict[str, Any]:
        return self._request("PATCH", f"/api/collections/{collection}/records/{record_id}", json=fields).json()

    def delete_record(self, collection: str, record_id: str) -> None:
        self._request("DELETE", f"/api/collections/{collection}/records/{record_id}")

    def delete_where(self, collection: str, filter: str) -> int:
        rows = self.list_records(collection, filter=filter)
        for row in rows:
            self.delete_record(collection, row["id"])
        return len(rows)

    # ---------- blocks ----------
    def list_blocks(self, date_iso: str) -> List[Dict[str, Any]]:
        return self.list_records(BLOCKS, filter=_eq("date", date_iso))

    def create_block(self, *, title: str, color: str, date: str, x: int, y: int) -> Dict[str, Any]:
        return self.create_record(BLOCKS, {"title": title, "color": color, "date": date, "x": x, "y": y})

    def update_block_position(self, block_id: str, x: int, y: int) -> Dict[str, Any]:
        return self.update_record(BLOCKS, block_id, x=x, y=y)

    def delete_block(self, block_id: str) -> None:
        self.delete_record(BLOCKS, block_id)

    # ---------- tasks ----------
    def list_tasks(self, block_id: str) -> List[Dict[str, Any]]:
        return self.list_records(TASKS, filter=_eq("block_id", block_id))

    def list_timed_tasks(self, block_ids: List[str]) -> List[Dict[str, Any]]:
        if not block_ids:
            return []
        any_block = " || ".join(_eq("block_id", b) for b in block_ids)
        return self.list_records(TASKS, filter=f'({any_block}) && time != ""')

    def create_task(self, *, block_id: str, title: str, time: Optional[str] = None,
                    completed: bool = False) -> Dict[str, Any]:
        return self.create_record(TASKS, {"block_id": block_id, "title": title,
                                          "time": time, "completed": completed})

    def create_tasks(self, payloads: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return self.create_records(TASKS, payloads)

    def patch_task(self, task_id: str, **fields) -> Dict[str, Any]:
        return self.update_record(TASKS, task_id, **fields)

    def delete_task(self, task_id: str) -> None:
        self.delete_record(TASKS, task_id)

    def delete_tasks_for_block(self, block_id: str) -> int:
        return self.delete_where(TASKS, _eq("block_id", block_id))

    # ---------- library ----------
    def list_library_blocks(self) -> List[Dict[str, Any]]:
        return self.list_records(LIBRARY_BLOCKS)

    def create_library_block(self, *, title: str, color: str) -> Dict[str, Any]:
        return self.create_record(LIBRARY_BLOCKS, {"title": title, "color": color})

    def delete_library_block(self, library_block_id: str) -> None:
        self.delete_record(LIBRARY_BLOCKS, library_block_id)

    def list_library_tasks(self, library_block_id: str) -> List[Dict[str, Any]]:
        return self.list_records(LIBRARY_TASKS, filter=_eq("block_id", library_block_id))

    def create_library_tasks(self, payloads: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return self.create_records(LIBRARY_TASKS, payloads)

    def delete_library_tasks_for_block(self, library_block_id: str) -> int:
        return self.delete_where(LIBRARY_TASKS, _eq("block_id", library_block_id))

    # ---------- backlog ----------
    def list_backlog(self) -> List[Dict[str, Any]]:
        return self.list_records(BACKLOG)

    def create_backlog_item(self, title: str) -> Dict[str, Any]:
        return self.create_record(BACKLOG, {"title": title})

    def delete_backlog_item(self, item_id: str) -> None:
        self.delete_record(BACKLOG, item_id)
