# ============================================================================
# BASE RESOURCE - CATALOG READS AND MUTATION ORCHESTRATION
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Infrastructure - Generic list/retrieve/create/update/remove
# PURPOSE: One orchestration path shared by every catalog resource kind
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Base Resource Patterns

Every resource kind (schema, table, column, trigger, policy, function)
follows the same shape:

    list()      catalog query, optional schema filtering and paging
    retrieve()  by numeric id or by natural key (name + parent/schema)
    create()    validate -> required check -> load schema names
                -> build statements -> run batch -> retrieve by natural key
    update()    validate -> fetch by id -> build statements
                -> run batch in one transaction -> retrieve by id
    remove()    fetch by id -> DROP -> return the pre-drop snapshot

Subclasses only declare their catalog query, models and builder, plus the
natural key used to find a freshly created object.

Failures are returned, never raised:
- validation  bad options, missing required param, malformed selector
- not_found   selector matched no catalog row (no SQL is composed)
- execution   the database rejected a statement (message passed through)
"""

from abc import ABC
from typing import (
    Any,
    ClassVar,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from psycopg import sql
from pydantic import BaseModel, ValidationError

from core.logging import ComponentType, get_logger, log_checkpoint, log_context
from core.results import MetaError, MetaResult
from core.schema.quoting import as_text
from core.schema.statements import MissingRequiredParam, StatementBatch
from repositories.catalog_sql import SYSTEM_SCHEMAS, build_select
from repositories.executor import QueryExecutor

ModelT = TypeVar("ModelT", bound=BaseModel)
CreateT = TypeVar("CreateT", bound=BaseModel)
UpdateT = TypeVar("UpdateT", bound=BaseModel)

Options = Union[BaseModel, Mapping[str, Any], None]


class ResourceError(Exception):
    """
    Raised inside statement composition to abort with a MetaError.

    Caught by the base resource and returned as a failed MetaResult.
    """

    def __init__(self, error: MetaError):
        self.error = error
        super().__init__(error.message)


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "options"
    return f"Invalid param {location}: {first.get('msg', 'invalid value')}"


class CatalogReader(ABC, Generic[ModelT]):
    """
    Read-only access to one kind of catalog object.

    Class attributes:
        kind: Singular name used in messages and logs ("trigger")
        alias: CTE name of the catalog query ("triggers")
        list_sql: Wrapped catalog query from repositories.catalog_sql
        model: Pydantic model for one row
        schema_column: Column filtered when hiding system schemas
        natural_key: Fields that must all be given to retrieve without an id
        optional_key: Fields that narrow a natural-key lookup when given
        key_defaults: Values used for optional_key fields left unset
        id_type: Type of the id path parameter
    """

    kind: ClassVar[str]
    alias: ClassVar[str]
    list_sql: ClassVar[str]
    model: ClassVar[Type[BaseModel]]
    schema_column: ClassVar[Optional[str]] = "schema"
    natural_key: ClassVar[Tuple[str, ...]] = ("name",)
    optional_key: ClassVar[Tuple[str, ...]] = ("schema",)
    key_defaults: ClassVar[Dict[str, Any]] = {}
    id_type: ClassVar[type] = int

    def __init__(self, executor: QueryExecutor):
        self.executor = executor
        self.logger = get_logger(f"repositories.{self.kind}", ComponentType.REPOSITORY)

    @property
    def title(self) -> str:
        return self.kind.capitalize()

    @property
    def selector_message(self) -> str:
        return "Missing id or " + " and ".join(self.natural_key)

    # ------------------------------------------------------------------
    # Row loading
    # ------------------------------------------------------------------

    async def _load(self, rows: List[Dict[str, Any]]) -> MetaResult[List[ModelT]]:
        """Turn catalog rows into models. Overridden to attach children."""
        return MetaResult.success([self.model.model_validate(row) for row in rows])

    async def _select(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        include_system_schemas: bool = True,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> MetaResult[List[ModelT]]:
        exclude = None
        if not include_system_schemas and self.schema_column:
            exclude = {self.schema_column: SYSTEM_SCHEMAS}

        query, params = build_select(
            self.list_sql,
            self.alias,
            filters=filters,
            exclude=exclude,
            limit=limit,
            offset=offset,
        )
        result = await self.executor.query(query, params)
        if not result.ok:
            return result
        return await self._load(result.data)

    # ------------------------------------------------------------------
    # Public reads
    # ------------------------------------------------------------------

    async def list(
        self,
        include_system_schemas: bool = False,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        **filters: Any,
    ) -> MetaResult[List[ModelT]]:
        """
        List catalog objects.

        Args:
            include_system_schemas: Include pg_catalog, information_schema, pg_toast
            limit: Maximum rows
            offset: Rows to skip
            **filters: Equality filters on output columns (e.g. schema="public")
        """
        return await self._select(
            filters=filters,
            include_system_schemas=include_system_schemas,
            limit=limit,
            offset=offset,
        )

    async def retrieve(self, id: Optional[Any] = None, **key: Any) -> MetaResult[ModelT]:
        """
        Retrieve one object by id or by natural key.

        When a natural key matches several rows (an overloaded function, a
        table name present in several schemas) the first row is returned.
        """
        if id is not None:
            result = await self._select(filters={"id": id})
            if not result.ok:
                return result
            if not result.data:
                return MetaResult.failure(
                    MetaError.not_found(f"{self.title} with id {id} does not exist")
                )
            return MetaResult.success(result.data[0])

        if any(key.get(field) in (None, "") for field in self.natural_key):
            return MetaResult.failure(MetaError.validation(self.selector_message))

        filters = {field: key[field] for field in self.natural_key}
        for field in self.optional_key:
            value = key.get(field) or self.key_defaults.get(field)
            if value:
                filters[field] = value

        result = await self._select(filters=filters)
        if not result.ok:
            return result
        if not result.data:
            described = ", ".join(f"{k} {v}" for k, v in filters.items())
            return MetaResult.failure(
                MetaError.not_found(f"Cannot find a {self.kind} with {described}")
            )
        return MetaResult.success(result.data[0])


class MetaResource(CatalogReader[ModelT], Generic[ModelT, CreateT, UpdateT]):
    """
    Catalog reader plus create/update/remove through a statement builder.

    Class attributes (in addition to CatalogReader's):
        create_model: Option set accepted by create()
        update_model: Option set accepted by update()
        builder: Static builder with check_required/create/update/remove
    """

    create_model: ClassVar[Type[BaseModel]]
    update_model: ClassVar[Type[BaseModel]]
    builder: ClassVar[Any]

    def __init__(self, executor: QueryExecutor, schemas: CatalogReader):
        """
        Args:
            executor: Shared query executor
            schemas: Schema reader whose list() supplies the names that
                qualified-name resolution runs against
        """
        super().__init__(executor)
        if schemas is None:
            raise TypeError(f"{type(self).__name__} requires a schema reader")
        self.schemas = schemas

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    async def _compose_create(
        self,
        options: CreateT,
        known_schemas: List[str],
    ) -> Tuple[StatementBatch, Dict[str, Any]]:
        """
        Build the CREATE batch and the natural key of the new object.

        Raises:
            MissingRequiredParam: A required option is absent
            ResourceError: Any other failure to report as-is
        """
        raise NotImplementedError

    async def _compose_update(self, current: ModelT, options: UpdateT) -> StatementBatch:
        return self.builder.update(current, options)

    def _compose_remove(self, current: ModelT, cascade: bool) -> sql.Composable:
        return self.builder.remove(current, cascade)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse(model: Type[BaseModel], options: Options) -> BaseModel:
        if isinstance(options, model):
            return options
        if isinstance(options, BaseModel):
            options = options.model_dump(exclude_unset=True, by_alias=True)
        return model.model_validate(options or {})

    async def known_schemas(self) -> MetaResult[List[str]]:
        """Names of every schema existing right now, system schemas included."""
        result = await self.schemas.list(include_system_schemas=True)
        if not result.ok:
            return result
        if result.data is None:
            return MetaResult.failure(MetaError(message="Failed to retrieve existing schemas"))
        return MetaResult.success([schema.name for schema in result.data])

    def _log_statements(self, batch: StatementBatch) -> None:
        for statement in batch:
            self.logger.debug(as_text(statement))
        log_checkpoint("statements_built", {"count": len(batch)})

    async def fetch_by_id(self, id: Any) -> MetaResult[ModelT]:
        return await self.retrieve(id=id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(self, options: Options) -> MetaResult[ModelT]:
        """Create an object and return it as the catalog now reports it."""
        with log_context(resource=self.kind, operation="create"):
            try:
                parsed = self._parse(self.create_model, options)
                self.builder.check_required(parsed)
            except ValidationError as e:
                return MetaResult.failure(MetaError.validation(_validation_message(e)))
            except MissingRequiredParam as e:
                return MetaResult.failure(MetaError.validation(str(e)))

            schemas = await self.known_schemas()
            if not schemas.ok:
                return schemas

            try:
                batch, key = await self._compose_create(parsed, schemas.data)
            except MissingRequiredParam as e:
                return MetaResult.failure(MetaError.validation(str(e)))
            except ResourceError as e:
                return MetaResult.failure(e.error)

            self._log_statements(batch)
            executed = await self.executor.run_batch(batch)
            if not executed.ok:
                self.logger.warning(f"Create {self.kind} failed: {executed.error.message}")
                return executed

            self.logger.info(f"Created {self.kind}", extra={"key": key})
            return await self.retrieve(**key)

    async def update(self, id: Any, options: Options) -> MetaResult[ModelT]:
        """Apply every supplied option in one transaction and re-read the object."""
        with log_context(resource=self.kind, resource_id=id, operation="update"):
            try:
                parsed = self._parse(self.update_model, options)
            except ValidationError as e:
                return MetaResult.failure(MetaError.validation(_validation_message(e)))

            current = await self.fetch_by_id(id)
            if not current.ok:
                return current

            try:
                batch = await self._compose_update(current.data, parsed)
            except MissingRequiredParam as e:
                return MetaResult.failure(MetaError.validation(str(e)))
            except ResourceError as e:
                return MetaResult.failure(e.error)

            if batch.is_empty:
                self.logger.debug("Nothing to update")
                return current

            self._log_statements(batch)
            executed = await self.executor.run_batch(batch)
            if not executed.ok:
                self.logger.warning(f"Update {self.kind} failed: {executed.error.message}")
                return executed

            self.logger.info(f"Updated {self.kind}", extra={"statements": len(batch)})
            return await self.retrieve(id=id)

    async def remove(self, id: Any, cascade: bool = False) -> MetaResult[ModelT]:
        """Drop an object and return the record it had before the drop."""
        with log_context(resource=self.kind, resource_id=id, operation="remove"):
            current = await self.fetch_by_id(id)
            if not current.ok:
                return current

            statement = self._compose_remove(current.data, cascade)
            self.logger.debug(as_text(statement))
            executed = await self.executor.query(statement)
            if not executed.ok:
                self.logger.warning(f"Remove {self.kind} failed: {executed.error.message}")
                return MetaResult.failure(executed.error)

            self.logger.info(f"Removed {self.kind}", extra={"cascade": cascade})
            return MetaResult.success(current.data)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CatalogReader",
    "MetaResource",
    "ResourceError",
    "Options",
]
