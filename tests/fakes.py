"""In-memory stand-in for the Supabase client used by the services.

Implements the slice of the PostgREST query builder the services call
(select/insert/update/delete with eq/neq/gt/in_ filters, order, limit,
range, single), the use_invite_code function, and enough of Supabase Auth
for sign up, sign in, token lookup and admin deletion. Unique and foreign
key constraints mirror the documented schema and raise postgrest APIError
with the Postgres error code, like the real client does.
"""

import re
import threading
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

from postgrest.exceptions import APIError


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


TABLE_DEFAULTS = {
    "profiles": {"display_name": None, "bio": None, "avatar_url": None, "is_admin": False, "updated_at": None},
    "visual_settings": {
        "background_type": "gradient", "background_value": None, "background_audio_url": None,
        "audio_autoplay": False, "audio_loop": True, "effect_snowfall": False,
        "effect_particles": False, "effect_glow": True, "effect_glitch": False, "updated_at": None,
    },
    "links": {"icon": "link", "sort_order": 0, "is_enabled": True, "updated_at": None},
    "badges": {"tooltip": None, "is_premium": False, "discord_buy_link": None},
    "user_badges": {"is_displayed": True},
    "invite_codes": {"uses_left": 1, "max_uses": 1, "created_by": None, "used_by": None, "used_at": None},
    "payment_logs": {
        "badge_id": None, "discord_username": None, "amount": None, "status": "pending",
        "notes": None, "confirmed_at": None, "confirmed_by": None,
    },
}

UNIQUE_KEYS = {
    "profiles": [("user_id",), ("username",)],
    "visual_settings": [("user_id",)],
    "invite_codes": [("code",)],
    "user_badges": [("user_id", "badge_id")],
}

FOREIGN_KEYS = {
    "user_badges": [("badge_id", "badges")],
    "payment_logs": [("badge_id", "badges")],
}

_EMBED = re.compile(r"(\w+):(\w+)\(\*\)")


def api_error(code: str, message: str) -> APIError:
    return APIError({"code": code, "message": message, "details": None, "hint": None})


class FakeResponse:
    def __init__(self, data):
        self.data = data
        self.count = None


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.descending = False
        self.limit_n = None
        self.offset_n = 0
        self.single_row = False

    def select(self, columns: str = "*", count=None):
        self.op = "select"
        self.columns = columns
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row, c=column, v=value: row.get(c) == v)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row, c=column, v=value: row.get(c) != v)
        return self

    def gt(self, column, value):
        self.filters.append(lambda row, c=column, v=value: row.get(c) is not None and row.get(c) > v)
        return self

    def in_(self, column, values):
        self.filters.append(lambda row, c=column, vs=tuple(values): row.get(c) in vs)
        return self

    def order(self, column, desc=False):
        self.order_by = column
        self.descending = desc
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def range(self, start, end):
        self.offset_n = start
        self.limit_n = end - start + 1
        return self

    def single(self):
        self.single_row = True
        return self

    def execute(self):
        return self.db._execute(self)


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: dict):
        self.db = db
        self.name = name
        self.params = params

    def execute(self):
        fault = self.db._faults.get((self.name, "rpc"))
        if fault:
            raise api_error(fault, f"simulated failure in {self.name}")
        if self.name != "use_invite_code":
            raise api_error("42883", f"function {self.name} does not exist")
        return FakeResponse(self.db._use_invite_code(self.params["invite_code"], self.params["user_uuid"]))


class FakeAuthAdmin:
    def __init__(self, auth: "FakeAuth"):
        self.auth = auth
        self.deleted = []

    def delete_user(self, user_id):
        if user_id not in self.auth.users:
            raise Exception("User not found")
        del self.auth.users[user_id]
        self.deleted.append(user_id)


class FakeAuth:
    def __init__(self):
        self.users = {}
        self.tokens = {}
        self.refresh_tokens = {}
        self.signed_out = 0
        self.fail_sign_up_with = None
        # With email confirmation on, Supabase answers a duplicate sign up with an
        # obfuscated user that has no identities instead of an error
        self.confirm_email = False
        self.admin = FakeAuthAdmin(self)

    def create_user(self, email: str, password: str = "secret123"):
        user = SimpleNamespace(
            id=str(uuid.uuid4()),
            email=email,
            user_metadata={},
            identities=[SimpleNamespace(provider="email")],
            app_metadata={},
            created_at=_now(),
            updated_at=None,
        )
        self.users[user.id] = {"user": user, "password": password}
        return user

    def issue_token(self, user_id: str) -> str:
        token = f"token-{uuid.uuid4().hex}"
        self.tokens[token] = user_id
        return token

    def _session(self, user):
        access_token = self.issue_token(user.id)
        refresh_token = f"refresh-{uuid.uuid4().hex}"
        self.refresh_tokens[refresh_token] = user.id
        return SimpleNamespace(access_token=access_token, refresh_token=refresh_token)

    def sign_up(self, credentials):
        if self.fail_sign_up_with:
            raise Exception(self.fail_sign_up_with)
        email = credentials["email"]
        if any(entry["user"].email == email for entry in self.users.values()):
            if self.confirm_email:
                obfuscated = SimpleNamespace(id=str(uuid.uuid4()), email=email, identities=[])
                return SimpleNamespace(user=obfuscated, session=None)
            raise Exception("User already registered")
        if len(credentials["password"]) < 6:
            raise Exception("Password should be at least 6 characters")
        user = self.create_user(email, credentials["password"])
        return SimpleNamespace(user=user, session=None)

    def sign_in_with_password(self, credentials):
        for entry in self.users.values():
            if entry["user"].email == credentials["email"] and entry["password"] == credentials["password"]:
                return SimpleNamespace(user=entry["user"], session=self._session(entry["user"]))
        raise Exception("Invalid login credentials")

    def refresh_session(self, refresh_token=None):
        user_id = self.refresh_tokens.pop(refresh_token, None)
        if user_id is None or user_id not in self.users:
            raise Exception("Invalid Refresh Token")
        user = self.users[user_id]["user"]
        return SimpleNamespace(user=user, session=self._session(user))

    def get_user(self, jwt=None):
        user_id = self.tokens.get(jwt)
        if user_id is None or user_id not in self.users:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self.users[user_id]["user"])

    def sign_out(self):
        self.signed_out += 1


class FakeSupabase:
    def __init__(self):
        self.tables = {name: [] for name in TABLE_DEFAULTS}
        self.auth = FakeAuth()
        self._lock = threading.Lock()
        self._faults = {}

    # Test helpers

    def seed(self, table: str, **values) -> dict:
        return self.table(table).insert(values).execute().data[0]

    def rows(self, table: str) -> list:
        return [dict(row) for row in self.tables[table]]

    def fail_on(self, table: str, op: str = "insert", code: str = "XX000"):
        """Make every matching operation raise a store error until clear_faults().

        For rpc calls pass the function name as table and op="rpc".
        """
        self._faults[(table, op)] = code

    def clear_faults(self):
        self._faults.clear()

    # Client surface

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict) -> FakeRpc:
        return FakeRpc(self, name, params)

    def _use_invite_code(self, code: str, user_id: str) -> bool:
        with self._lock:
            for row in self.tables["invite_codes"]:
                if row["code"] == code and row["uses_left"] > 0:
                    row["uses_left"] -= 1
                    row["used_by"] = user_id
                    row["used_at"] = _now()
                    return True
            return False

    def _execute(self, query: FakeQuery) -> FakeResponse:
        fault = self._faults.get((query.table, query.op))
        if fault:
            raise api_error(fault, f"simulated {query.op} failure on {query.table}")

        with self._lock:
            rows = self.tables[query.table]
            if query.op == "insert":
                return FakeResponse(self._insert(query.table, query.payload))

            matched = [row for row in rows if all(f(row) for f in query.filters)]

            if query.op == "update":
                for row in matched:
                    self._check_unique(query.table, {**row, **query.payload}, exclude=row)
                for row in matched:
                    row.update(query.payload)
                return FakeResponse([dict(row) for row in matched])

            if query.op == "delete":
                self.tables[query.table] = [row for row in rows if row not in matched]
                return FakeResponse([dict(row) for row in matched])

            if query.order_by:
                key = query.order_by
                matched = sorted(
                    matched,
                    key=lambda r: (r.get(key) is None, r.get(key) if r.get(key) is not None else ""),
                    reverse=query.descending,
                )
            matched = matched[query.offset_n:]
            if query.limit_n is not None:
                matched = matched[:query.limit_n]
            data = [self._embed(query.columns, dict(row)) for row in matched]

            if query.single_row:
                if len(data) != 1:
                    raise api_error("PGRST116", "JSON object requested, multiple (or no) rows returned")
                return FakeResponse(data[0])
            return FakeResponse(data)

    def _insert(self, table: str, payload) -> list:
        items = payload if isinstance(payload, list) else [payload]
        created = []
        for item in items:
            row = {"id": str(uuid.uuid4()), "created_at": _now()}
            row.update(TABLE_DEFAULTS.get(table, {}))
            if table == "user_badges":
                row["acquired_at"] = _now()
            row.update(item)
            self._check_unique(table, row)
            self._check_foreign_keys(table, row)
            self.tables[table].append(row)
            created.append(dict(row))
        return created

    def _check_unique(self, table: str, row: dict, exclude: dict = None):
        for columns in UNIQUE_KEYS.get(table, []):
            for other in self.tables[table]:
                if other is exclude:
                    continue
                if all(other.get(c) == row.get(c) for c in columns):
                    raise api_error(
                        "23505",
                        f'duplicate key value violates unique constraint "{table}_{"_".join(columns)}_key"',
                    )

    def _check_foreign_keys(self, table: str, row: dict):
        for column, target in FOREIGN_KEYS.get(table, []):
            value = row.get(column)
            if value is not None and not any(r["id"] == value for r in self.tables[target]):
                raise api_error("23503", f'insert on table "{table}" violates foreign key constraint')

    def _embed(self, columns: str, row: dict) -> dict:
        for alias, target in _EMBED.findall(columns or ""):
            foreign_key = f"{target.rstrip('s')}_id"
            match = next((r for r in self.tables[target] if r["id"] == row.get(foreign_key)), None)
            row[alias] = dict(match) if match else None
        return row
