# ==== pb_bootstrap.py ====
# Crea/actualiza las colecciones de Day Blocks en PocketBase usando la Admin API.
# Credenciales desde el entorno (.env): PB_BASE_URL, PB_ADMIN_EMAIL, PB_ADMIN_PASSWORD
# Ejecutar con:  python pb_bootstrap.py

import sys
import requests
from core.config import BASE_URL, ADMIN_EMAIL, ADMIN_PASSWORD
from core.models import BlockColor

AUTH_RULES = {
    "listRule": "@request.auth.id != ''",
    "viewRule": "@request.auth.id != ''",
    "createRule": "@request.auth.id != ''",
    "updateRule": "@request.auth.id != ''",
    "deleteRule": "@request.auth.id != ''",
}


def die(msg):
    print(msg)
    sys.exit(1)


class PBAdmin:
    def __init__(self, base):
        self.base = base.rstrip('/')
        self.s = requests.Session()

    def admin_login(self, email, password):
        r = self.s.post(f"{self.base}/api/admins/auth-with-password", json={
            "identity": email,
            "password": password
        }, timeout=15)
        if not r.ok:
            die(f"[LOGIN] {r.status_code}: {r.text}")
        tok = r.json().get("token")
        if not tok:
            die("[LOGIN] token faltante")
        self.s.headers.update({"Authorization": f"Bearer {tok}"})
        print("[OK] Admin login")

    def get_collection(self, name_or_id):
        r = self.s.get(f"{self.base}/api/collections/{name_or_id}", timeout=15)
        if r.status_code == 404:
            return None
        if not r.ok:
            die(f"[GET {name_or_id}] {r.status_code}: {r.text}")
        return r.json()

    def create_collection(self, payload):
        r = self.s.post(f"{self.base}/api/collections", json=payload, timeout=20)
        if not r.ok:
            die(f"[CREATE {payload.get('name')}] {r.status_code}: {r.text}")
        return r.json()

    def update_collection(self, id_or_name, payload):
        r = self.s.patch(f"{self.base}/api/collections/{id_or_name}", json=payload, timeout=20)
        if not r.ok:
            die(f"[UPDATE {id_or_name}] {r.status_code}: {r.text}")
        return r.json()


def _title_field():
    return {"name": "title", "type": "text", "required": True, "options": {"min": 1, "max": 200}}


def _color_field():
    return {"name": "color", "type": "select", "required": True,
            "options": {"maxSelect": 1, "values": [c.label for c in BlockColor]}}


def _task_fields(owner_collection_id: str):
    return [
        {"name": "block_id", "type": "relation", "required": True,
         "options": {"collectionId": owner_collection_id, "cascadeDelete": False, "maxSelect": 1}},
        _title_field(),
        # HH:MM, vacío = sin hora
        {"name": "time", "type": "text", "required": False, "options": {"pattern": "^([01][0-9]|2[0-3]):[0-5][0-9]$"}},
        {"name": "completed", "type": "bool", "required": False, "options": {}},
    ]


def spec_blocks():
    return {
        "name": "blocks",
        "type": "base",
        "schema": [
            _title_field(),
            _color_field(),
            # YYYY-MM-DD como texto para filtrar por igualdad
            {"name": "date", "type": "text", "required": True, "options": {"pattern": "^\\d{4}-\\d{2}-\\d{2}$"}},
            {"name": "x", "type": "number", "required": False, "options": {}},
            {"name": "y", "type": "number", "required": False, "options": {}},
        ],
        "indexes": ["CREATE INDEX idx_blocks_date ON blocks (date)"],
        **AUTH_RULES,
    }


def spec_tasks(blocks_id: str):
    return {
        "name": "tasks",
        "type": "base",
        "schema": _task_fields(blocks_id),
        "indexes": ["CREATE INDEX idx_tasks_block ON tasks (block_id)"],
        **AUTH_RULES,
    }


def spec_library_blocks():
    return {
        "name": "library_blocks",
        "type": "base",
        "schema": [_title_field(), _color_field()],
        "indexes": [],
        **AUTH_RULES,
    }


def spec_library_tasks(library_blocks_id: str):
    return {
        "name": "library_tasks",
        "type": "base",
        "schema": _task_fields(library_blocks_id),
        "indexes": ["CREATE INDEX idx_library_tasks_block ON library_tasks (block_id)"],
        **AUTH_RULES,
    }


def spec_backlog():
    return {
        "name": "backlog",
        "type": "base",
        "schema": [_title_field()],
        "indexes": [],
        **AUTH_RULES,
    }


def upsert_collection(pb: PBAdmin, spec: dict):
    existing = pb.get_collection(spec["name"])
    if not existing:
        return pb.create_collection(spec)
    cid = existing.get("id") or spec["name"]
    # Asegura que el nombre permanezca igual para patch por id
    spec_with_id_name = spec.copy()
    spec_with_id_name["id"] = cid
    spec_with_id_name["name"] = existing["name"]
    return pb.update_collection(cid, spec_with_id_name)


def main():
    if not ADMIN_EMAIL or not ADMIN_PASSWORD:
        die("Definí PB_ADMIN_EMAIL y PB_ADMIN_PASSWORD")
    pb = PBAdmin(BASE_URL)
    pb.admin_login(ADMIN_EMAIL, ADMIN_PASSWORD)

    blocks = upsert_collection(pb, spec_blocks())
    print("OK: blocks", blocks.get("id"))

    tasks = upsert_collection(pb, spec_tasks(blocks.get("id")))
    print("OK: tasks", tasks.get("id"))

    library_blocks = upsert_collection(pb, spec_library_blocks())
    print("OK: library_blocks", library_blocks.get("id"))

    library_tasks = upsert_collection(pb, spec_library_tasks(library_blocks.get("id")))
    print("OK: library_tasks", library_tasks.get("id"))

    backlog = upsert_collection(pb, spec_backlog())
    print("OK: backlog", backlog.get("id"))

    print("Bootstrap completo.")


if __name__ == "__main__":
    main()
