"""In-memory stand-ins for the async pymongo collection API used by services.

Only the calls the services make are implemented. Every filter and update a
collection receives is recorded so tests can check owner scoping.
"""

import copy
from types import SimpleNamespace
from typing import Any

import pytest
from pymongo.errors import DuplicateKeyError

from studysphere.core.core import Services

MISSING = object()


def _matches_condition(value: Any, condition: Any) -> bool:
    if isinstance(condition, dict) and condition and all(key.startswith("$") for key in condition):
        for op, operand in condition.items():
            if op == "$in":
                if value not in operand:
                    return False
            elif op in {"$gte", "$gt", "$lte", "$lt"}:
                if value is MISSING or value is None:
                    return False
                if op == "$gte" and not value >= operand:
                    return False
                if op == "$gt" and not value > operand:
                    return False
                if op == "$lte" and not value <= operand:
                    return False
                if op == "$lt" and not value < operand:
                    return False
            else:
                raise NotImplementedError(op)
        return True
    if isinstance(value, list) and not isinstance(condition, list):
        return condition in value
    return value == condition


def matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    return all(_matches_condition(doc.get(key, MISSING), condition) for key, condition in query.items())


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs
        self._skip = 0
        self._limit = 0

    def skip(self, count: int) -> "FakeCursor":
        self._skip = count
        return self

    def limit(self, count: int) -> "FakeCursor":
        self._limit = count
        return self

    def __aiter__(self):
        docs = self._docs[self._skip :]
        if self._limit:
            docs = docs[: self._limit]
        return self._iterate(docs)

    @staticmethod
    async def _iterate(docs):
        for doc in docs:
            yield doc


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.filters: list[dict[str, Any]] = []
        self.updates: list[dict[str, Any]] = []
        self.unique_keys: list[tuple[str, ...]] = []

    def _record(self, query: dict[str, Any]) -> None:
        self.filters.append(copy.deepcopy(query))

    def _find(self, query: dict[str, Any]) -> list[dict[str, Any]]:
        self._record(query)
        return [doc for doc in self.docs if matches(doc, query)]

    def _check_unique(self, doc: dict[str, Any]) -> None:
        keys = [("_id",), *self.unique_keys]
        for fields in keys:
            values = tuple(doc.get(field) for field in fields)
            if any(tuple(other.get(field) for field in fields) == values for other in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} fields: {fields}")

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False) -> str:
        if unique:
            self.unique_keys.append(tuple(field for field, _ in keys))
        return "_".join(field for field, _ in keys)

    async def insert_one(self, doc: dict[str, Any]) -> SimpleNamespace:
        self._check_unique(doc)
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc.get("_id"))

    async def insert_many(self, docs: list[dict[str, Any]]) -> SimpleNamespace:
        for doc in docs:
            await self.insert_one(doc)
        return SimpleNamespace(inserted_ids=[doc.get("_id") for doc in docs])

    async def find_one(self, query: dict[str, Any], projection: dict[str, Any] | None = None) -> dict[str, Any] | None:
        found = self._find(query)
        return copy.deepcopy(found[0]) if found else None

    def find(
        self, query: dict[str, Any], sort: list[tuple[str, int]] | None = None, projection: dict[str, Any] | None = None
    ) -> FakeCursor:
        docs = [copy.deepcopy(doc) for doc in self._find(query)]
        for field, direction in reversed(sort or []):
            docs.sort(key=lambda d, f=field: (d.get(f) is not None, d.get(f)), reverse=direction < 0)
        return FakeCursor(docs)

    async def count_documents(self, query: dict[str, Any], limit: int = 0) -> int:
        count = len(self._find(query))
        return min(count, limit) if limit else count

    def _apply(self, doc: dict[str, Any], update: dict[str, Any], inserting: bool) -> None:
        for op, fields in update.items():
            if op == "$set" or (op == "$setOnInsert" and inserting):
                doc.update(copy.deepcopy(fields))
            elif op == "$inc":
                for field, amount in fields.items():
                    doc[field] = doc.get(field, 0) + amount
            elif op != "$setOnInsert":
                raise NotImplementedError(op)

    async def find_one_and_update(
        self,
        query: dict[str, Any],
        update: dict[str, Any],
        upsert: bool = False,
        return_document: bool = False,
    ) -> dict[str, Any] | None:
        self.updates.append(copy.deepcopy(update))
        found = self._find(query)
        if found:
            doc = found[0]
            before = copy.deepcopy(doc)
            self._apply(doc, update, inserting=False)
            return copy.deepcopy(doc) if return_document else before
        if not upsert:
            return None
        doc = {key: value for key, value in query.items() if not isinstance(value, dict)}
        self._apply(doc, update, inserting=True)
        self._check_unique(doc)
        self.docs.append(doc)
        return copy.deepcopy(doc) if return_document else None

    async def update_one(self, query: dict[str, Any], update: dict[str, Any]) -> SimpleNamespace:
        self.updates.append(copy.deepcopy(update))
        found = self._find(query)
        if found:
            self._apply(found[0], update, inserting=False)
        return SimpleNamespace(matched_count=len(found[:1]), modified_count=len(found[:1]))

    async def delete_one(self, query: dict[str, Any]) -> SimpleNamespace:
        found = self._find(query)
        if found:
            self.docs.remove(found[0])
        return SimpleNamespace(deleted_count=len(found[:1]))

    async def delete_many(self, query: dict[str, Any]) -> SimpleNamespace:
        found = self._find(query)
        for doc in found:
            self.docs.remove(doc)
        return SimpleNamespace(deleted_count=len(found))

    async def aggregate(self, pipeline: list[dict[str, Any]]) -> FakeCursor:
        """Supports `$match` followed by a single-group `$sum` of `{"$ifNull": [field, 0]}`."""
        docs = self.docs
        rows: list[dict[str, Any]] = []
        for stage in pipeline:
            if "$match" in stage:
                docs = self._find(stage["$match"])
            elif "$group" in stage:
                group = stage["$group"]
                if not docs:
                    continue
                row: dict[str, Any] = {"_id": group["_id"]}
                for name, accumulator in group.items():
                    if name == "_id":
                        continue
                    field, default = accumulator["$sum"]["$ifNull"]
                    key = field.removeprefix("$")
                    row[name] = sum(doc.get(key) if doc.get(key) is not None else default for doc in docs)
                rows.append(row)
            else:
                raise NotImplementedError(stage)
        return FakeCursor(rows)

    def owner_filters(self) -> list[dict[str, Any]]:
        """Recorded filters that do not carry a user_id condition."""
        return [query for query in self.filters if "user_id" not in query]


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    def __getitem__(self, name: str) -> FakeCollection:
        return self.get_collection(name)


@pytest.fixture
def database():
    return FakeDatabase()


@pytest.fixture
def services(database, config):
    """The real service registry wired to the in-memory database."""
    registry = Services(database)
    registry.set_core(SimpleNamespace(config=config, services=registry))
    return registry
