from abc import ABC, abstractmethod
from collections import defaultdict

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError

from .exceptions import StoreError


class Repository(ABC):
    """Narrow access to one entity's store partition."""

    @abstractmethod
    def add(self, record):
        raise NotImplementedError

    @abstractmethod
    def get(self, pk):
        """Return the record or None if ``pk`` does not resolve."""
        raise NotImplementedError

    @abstractmethod
    def all(self):
        raise NotImplementedError

    @abstractmethod
    def filter_by(self, **criteria):
        raise NotImplementedError

    @abstractmethod
    def save(self, record, fields):
        """Persist ``fields`` of an already stored record."""
        raise NotImplementedError


class DjangoRepository(Repository):
    def __init__(self, model):
        self.model = model

    def add(self, record):
        try:
            record.save(force_insert=True)
        except DatabaseError as exc:
            raise StoreError(f"Could not store {self.model.__name__}") from exc
        return record

    def get(self, pk):
        try:
            return self.model.objects.filter(pk=pk).first()
        except (DjangoValidationError, ValueError, TypeError):
            # Malformed identifiers never resolve
            return None
        except DatabaseError as exc:
            raise StoreError(f"Could not read {self.model.__name__} {pk}") from exc

    def all(self):
        try:
            return list(self.model.objects.all())
        except DatabaseError as exc:
            raise StoreError(f"Could not scan {self.model.__name__}") from exc

    def filter_by(self, **criteria):
        try:
            return list(self.model.objects.filter(**criteria))
        except DatabaseError as exc:
            raise StoreError(f"Could not scan {self.model.__name__}") from exc

    def save(self, record, fields):
        try:
            record.save(update_fields=list(fields))
        except DatabaseError as exc:
            raise StoreError(f"Could not update {self.model.__name__} {record.pk}") from exc
        return record


class InMemoryRepository(Repository):
    """Dict-backed store with optional secondary indexes, used in tests."""

    def __init__(self, index_fields=()):
        self._records = {}
        self._indexes = {field: defaultdict(set) for field in index_fields}

    def add(self, record):
        key = str(record.pk)
        self._records[key] = record
        self._reindex(key, record)
        return record

    def get(self, pk):
        return self._records.get(str(pk))

    def all(self):
        return list(self._records.values())

    def filter_by(self, **criteria):
        candidates = None
        for field, value in criteria.items():
            if field in self._indexes:
                keys = self._indexes[field].get(value, set())
                candidates = keys if candidates is None else candidates & keys

        if candidates is None:
            records = self._records.values()
        else:
            records = [self._records[key] for key in candidates]

        return [
            record for record in records
            if all(getattr(record, field) == value for field, value in criteria.items())
        ]

    def save(self, record, fields):
        key = str(record.pk)
        if key not in self._records:
            raise StoreError(f"Cannot update unknown record {key}")
        self._records[key] = record
        self._reindex(key, record)
        return record

    def _reindex(self, key, record):
        for field, index in self._indexes.items():
            for keys in index.values():
                keys.discard(key)
            index[getattr(record, field)].add(key)
