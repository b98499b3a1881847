"""Generic repository: lookups, partial updates and the list query contract."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, Iterable, TypeVar

from flask import current_app, has_app_context
from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import db
from utils.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


@dataclass
class ListQuery:
    """Validated list parameters shared by every list endpoint."""

    page: int = 1
    limit: int = 10
    filters: dict[str, Any] = field(default_factory=dict)
    search: str | None = None
    order_by: str | None = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[ModelT]):
    items: list[ModelT]
    page: int
    limit: int
    total: int


class Repository(Generic[ModelT]):
    """CRUD and listing for one model.

    Subclasses declare which query keys are equality filters, which columns
    ``search`` scans and the named orderings ``orderBy`` may select. Every
    ordering ends with ``id desc`` so pagination is deterministic.
    """

    model: ClassVar[type]
    not_found_message: ClassVar[str] = "Resource not found"
    conflict_message: ClassVar[str] = "Resource already exists"
    # wire key -> column attribute
    equality_filters: ClassVar[dict[str, str]] = {}
    search_columns: ClassVar[tuple[str, ...]] = ()
    orderings: ClassVar[dict[str, tuple]] = {}
    default_ordering: ClassVar[tuple] = ()

    def __init__(self, session: Session | None = None, *, count_total: bool | None = None):
        self.session = session or db.session
        if count_total is None:
            count_total = bool(
                has_app_context() and current_app.config.get("PAGINATION_COUNT_TOTAL")
            )
        self.count_total = count_total

    # Lookups

    def default_criteria(self) -> list:
        """Criteria applied to every read; empty unless a subclass hides rows."""

        return []

    def get(self, entity_id: int) -> ModelT | None:
        stmt = select(self.model).where(self.model.id == entity_id, *self.default_criteria())
        return self.session.scalars(stmt).first()

    def get_or_404(self, entity_id: int) -> ModelT:
        instance = self.get(entity_id)
        if instance is None:
            raise NotFoundError(self.not_found_message)
        return instance

    def find_one(self, **columns) -> ModelT | None:
        criteria = [getattr(self.model, key) == value for key, value in columns.items()]
        stmt = select(self.model).where(*criteria, *self.default_criteria())
        return self.session.scalars(stmt).first()

    def exists(self, *, exclude_id: int | None = None, **columns) -> bool:
        criteria = [getattr(self.model, key) == value for key, value in columns.items()]
        if exclude_id is not None:
            criteria.append(self.model.id != exclude_id)
        stmt = select(self.model.id).where(*criteria).limit(1)
        return self.session.scalars(stmt).first() is not None

    # Writes

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            logger.warning("Integrity error on %s: %s", self.model.__tablename__, exc.orig)
            raise ConflictError(self.conflict_message) from exc

    def create(self, **values) -> ModelT:
        instance = self.model(**values)
        self.session.add(instance)
        self._commit()
        return instance

    def update(self, instance: ModelT, values: dict[str, Any]) -> ModelT:
        """Replace every given attribute; keys not in ``values`` are untouched."""

        for key, value in values.items():
            setattr(instance, key, value)
        self._commit()
        return instance

    def delete(self, instance: ModelT) -> None:
        self.session.delete(instance)
        self._commit()

    def increment_views(self, instance: ModelT) -> int:
        """Atomically bump the ``views`` counter and return the new value."""

        self.session.execute(
            update(self.model)
            .where(self.model.id == instance.id)
            .values(views=self.model.views + 1)
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        self.session.refresh(instance)
        return instance.views

    # Listing

    def _apply_filters(self, filters: dict[str, Any]) -> list:
        criteria = []
        for key, value in filters.items():
            if value is None:
                continue
            column_name = self.equality_filters.get(key)
            if column_name is not None:
                criteria.append(getattr(self.model, column_name) == value)
        return criteria

    def _search(self, term: str | None) -> list:
        if not term or not self.search_columns:
            return []
        pattern = f"%{term}%"
        return [
            or_(*(getattr(self.model, name).ilike(pattern) for name in self.search_columns))
        ]

    def _ordering(self, order_by: str | None) -> list:
        clauses = list(self.orderings.get(order_by or "", ()))
        clauses.extend(self.default_ordering)
        clauses.append(self.model.id.desc())
        return clauses

    def criteria_for(self, query: ListQuery) -> list:
        return [
            *self.default_criteria(),
            *self._apply_filters(query.filters),
            *self._search(query.search),
        ]

    def list(self, query: ListQuery) -> Page[ModelT]:
        criteria = self.criteria_for(query)
        stmt = (
            select(self.model)
            .where(*criteria)
            .order_by(*self._ordering(query.order_by))
            .offset(query.offset)
            .limit(query.limit)
        )
        items = list(self.session.scalars(stmt).unique())
        if self.count_total:
            total = self.count(criteria)
        else:
            total = len(items)
        return Page(items=items, page=query.page, limit=query.limit, total=total)

    def count(self, criteria: Iterable = ()) -> int:
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        return self.session.scalar(stmt) or 0

    # Facets

    def distinct_values(self, column_name: str, *criteria) -> list:
        column = getattr(self.model, column_name)
        stmt = (
            select(column)
            .where(column.is_not(None), column != "", *criteria)
            .distinct()
            .order_by(column)
        )
        return list(self.session.scalars(stmt))

    def json_values(self, column_name: str, *criteria) -> list[str]:
        """Sorted union of the elements of a JSON list column."""

        column = getattr(self.model, column_name)
        values: set[str] = set()
        for row in self.session.scalars(select(column).where(column.is_not(None), *criteria)):
            values.update(row or [])
        return sorted(values)
