# ============================================================================
# CATALOG QUERIES
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Read queries against pg_catalog
# PURPOSE: One query per resource kind, wrapped so callers can filter it
# CREATED: 16 OCT 2026
# ============================================================================
"""
Catalog Queries

Each query is wrapped as ``WITH <kind> AS (...) SELECT * FROM <kind>`` so
filters can be appended against stable output column names:

    query, params = build_select(
        TRIGGERS_SQL, "triggers",
        filters={"name": "audit", "table": "users"},
    )

Filters and paging are composed with psycopg.sql and passed as %(name)s
parameters, never interpolated. The query texts therefore contain no "%"
(LIKE patterns are written as regular expressions).
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from psycopg import sql


SYSTEM_SCHEMAS = ("pg_catalog", "information_schema", "pg_toast")


def _wrap(kind: str, body: str) -> str:
    return f"WITH {kind} AS ({body}) SELECT * FROM {kind}"


# ============================================================================
# SCHEMAS
# ============================================================================

SCHEMAS_SQL = _wrap("schemas", r"""
SELECT
  n.oid::int8 AS id,
  n.nspname AS name,
  u.rolname AS owner
FROM pg_namespace n
JOIN pg_roles u ON u.oid = n.nspowner
WHERE n.nspname !~ '^pg_(toast_)?temp_'
  AND (pg_has_role(n.nspowner, 'USAGE') OR has_schema_privilege(n.oid, 'CREATE, USAGE'))
""")


# ============================================================================
# TABLES
# ============================================================================

TABLES_SQL = _wrap("tables", r"""
SELECT
  c.oid::int8 AS id,
  nc.nspname AS schema,
  c.relname AS name,
  c.relrowsecurity AS rls_enabled,
  c.relforcerowsecurity AS rls_forced,
  CASE c.relreplident
    WHEN 'd' THEN 'DEFAULT'
    WHEN 'i' THEN 'INDEX'
    WHEN 'f' THEN 'FULL'
    ELSE 'NOTHING'
  END AS replica_identity,
  pg_total_relation_size(c.oid)::int8 AS bytes,
  pg_size_pretty(pg_total_relation_size(c.oid)) AS size,
  pg_stat_get_live_tuples(c.oid) AS live_rows_estimate,
  pg_stat_get_dead_tuples(c.oid) AS dead_rows_estimate,
  obj_description(c.oid, 'pg_class') AS comment,
  COALESCE(pk.primary_keys, ARRAY[]::text[]) AS primary_keys
FROM pg_namespace nc
JOIN pg_class c ON nc.oid = c.relnamespace
LEFT JOIN LATERAL (
  SELECT array_agg(a.attname::text ORDER BY array_position(i.indkey::int2[], a.attnum)) AS primary_keys
  FROM pg_index i
  JOIN pg_attribute a ON a.attrelid = i.indrelid AND a.attnum = ANY(i.indkey)
  WHERE i.indrelid = c.oid AND i.indisprimary
) pk ON true
WHERE c.relkind IN ('r', 'p')
  AND NOT pg_is_other_temp_schema(nc.oid)
  AND (
    pg_has_role(c.relowner, 'USAGE')
    OR has_table_privilege(c.oid, 'SELECT, INSERT, UPDATE, DELETE, TRUNCATE, REFERENCES, TRIGGER')
    OR has_any_column_privilege(c.oid, 'SELECT, INSERT, UPDATE, REFERENCES')
  )
""")


# ============================================================================
# COLUMNS
# ============================================================================

COLUMNS_SQL = _wrap("columns", r"""
SELECT
  c.oid::int8 AS table_id,
  nc.nspname AS schema,
  c.relname AS "table",
  c.oid::text || '.' || a.attnum::text AS id,
  a.attnum::int4 AS ordinal_position,
  a.attname AS name,
  CASE WHEN a.atthasdef THEN pg_get_expr(ad.adbin, ad.adrelid) ELSE NULL END AS default_value,
  CASE
    WHEN t.typtype = 'd' THEN
      CASE
        WHEN bt.typelem <> 0 AND bt.typlen = -1 THEN 'ARRAY'
        WHEN nbt.nspname = 'pg_catalog' THEN format_type(t.typbasetype, NULL)
        ELSE 'USER-DEFINED'
      END
    ELSE
      CASE
        WHEN t.typelem <> 0 AND t.typlen = -1 THEN 'ARRAY'
        WHEN nt.nspname = 'pg_catalog' THEN format_type(a.atttypid, NULL)
        ELSE 'USER-DEFINED'
      END
  END AS data_type,
  COALESCE(bt.typname, t.typname) AS format,
  a.attidentity IN ('a', 'd') AS is_identity,
  CASE a.attidentity
    WHEN 'a' THEN 'ALWAYS'
    WHEN 'd' THEN 'BY DEFAULT'
    ELSE NULL
  END AS identity_generation,
  a.attgenerated IN ('s') AS is_generated,
  NOT (a.attnotnull OR (t.typtype = 'd' AND t.typnotnull)) AS is_nullable,
  (
    c.relkind IN ('r', 'p')
    OR (c.relkind IN ('v', 'f') AND pg_column_is_updatable(c.oid, a.attnum, false))
  ) AS is_updatable,
  uniques.table_id IS NOT NULL AS is_unique,
  check_constraints.definition AS "check",
  array_to_json(
    array(
      SELECT enumlabel
      FROM pg_catalog.pg_enum enums
      WHERE enums.enumtypid = COALESCE(bt.oid, t.oid)
        OR enums.enumtypid = COALESCE(bt.typelem, t.typelem)
      ORDER BY enums.enumsortorder
    )
  ) AS enums,
  col_description(c.oid, a.attnum) AS comment
FROM pg_attribute a
LEFT JOIN pg_attrdef ad ON a.attrelid = ad.adrelid AND a.attnum = ad.adnum
JOIN (pg_class c JOIN pg_namespace nc ON c.relnamespace = nc.oid) ON a.attrelid = c.oid
JOIN (pg_type t JOIN pg_namespace nt ON t.typnamespace = nt.oid) ON a.atttypid = t.oid
LEFT JOIN (pg_type bt JOIN pg_namespace nbt ON bt.typnamespace = nbt.oid)
  ON t.typtype = 'd' AND t.typbasetype = bt.oid
LEFT JOIN (
  SELECT DISTINCT conrelid AS table_id, conkey[1] AS ordinal_position
  FROM pg_catalog.pg_constraint
  WHERE contype = 'u' AND cardinality(conkey) = 1
) AS uniques ON uniques.table_id = c.oid AND uniques.ordinal_position = a.attnum
LEFT JOIN (
  SELECT DISTINCT ON (conrelid, conkey[1])
    conrelid AS table_id,
    conkey[1] AS ordinal_position,
    substring(
      pg_get_constraintdef(pg_constraint.oid, true),
      8,
      length(pg_get_constraintdef(pg_constraint.oid, true)) - 8
    ) AS definition
  FROM pg_catalog.pg_constraint
  WHERE contype = 'c' AND cardinality(conkey) = 1
  ORDER BY conrelid, conkey[1], pg_constraint.oid
) AS check_constraints
  ON check_constraints.table_id = c.oid AND check_constraints.ordinal_position = a.attnum
WHERE NOT pg_is_other_temp_schema(nc.oid)
  AND a.attnum > 0
  AND NOT a.attisdropped
  AND c.relkind IN ('r', 'v', 'm', 'f', 'p')
  AND (
    pg_has_role(c.relowner, 'USAGE')
    OR has_column_privilege(c.oid, a.attnum, 'SELECT, INSERT, UPDATE, REFERENCES')
  )
""")


# ============================================================================
# TRIGGERS
# ============================================================================
# tgtype bits: ROW=1 BEFORE=2 INSERT=4 DELETE=8 UPDATE=16 TRUNCATE=32 INSTEAD=64

TRIGGERS_SQL = _wrap("triggers", r"""
SELECT
  t.oid::int8 AS id,
  t.tgrelid::int8 AS table_id,
  CASE t.tgenabled
    WHEN 'D' THEN 'DISABLED'
    WHEN 'O' THEN 'ORIGIN'
    WHEN 'R' THEN 'REPLICA'
    WHEN 'A' THEN 'ALWAYS'
  END AS enabled_mode,
  t.tgname AS name,
  c.relname AS "table",
  n.nspname AS schema,
  substring(pg_get_triggerdef(t.oid) FROM 'WHEN \((.+)\) EXECUTE (?:FUNCTION|PROCEDURE)') AS condition,
  CASE WHEN (t.tgtype::int4 & 1) = 1 THEN 'ROW' ELSE 'STATEMENT' END AS orientation,
  CASE
    WHEN (t.tgtype::int4 & 66) = 2 THEN 'BEFORE'
    WHEN (t.tgtype::int4 & 66) = 64 THEN 'INSTEAD OF'
    ELSE 'AFTER'
  END AS activation,
  array_remove(ARRAY[
    CASE WHEN (t.tgtype::int4 & 4) = 4 THEN 'INSERT'::text END,
    CASE WHEN (t.tgtype::int4 & 16) = 16 THEN 'UPDATE'::text END,
    CASE WHEN (t.tgtype::int4 & 8) = 8 THEN 'DELETE'::text END,
    CASE WHEN (t.tgtype::int4 & 32) = 32 THEN 'TRUNCATE'::text END
  ], NULL) AS events,
  fn.nspname AS function_schema,
  p.proname AS function_name,
  array_remove(string_to_array(encode(t.tgargs, 'escape'), '\000'), '') AS function_args,
  t.tgconstraint <> 0 AS is_constraint,
  CASE WHEN t.tgconstrrelid <> 0 THEN t.tgconstrrelid::regclass::text END AS referenced_table,
  t.tgdeferrable AS deferrable,
  t.tginitdeferred AS initially_deferred,
  t.tgoldtable AS old_table,
  t.tgnewtable AS new_table,
  ext.extname AS extension,
  ext.extname IS NOT NULL AS is_extension_dependent
FROM pg_trigger t
JOIN pg_class c ON c.oid = t.tgrelid
JOIN pg_namespace n ON n.oid = c.relnamespace
JOIN pg_proc p ON p.oid = t.tgfoid
JOIN pg_namespace fn ON fn.oid = p.pronamespace
LEFT JOIN LATERAL (
  SELECT e.extname
  FROM pg_depend d
  JOIN pg_extension e ON e.oid = d.refobjid
  WHERE d.classid = 'pg_trigger'::regclass
    AND d.objid = t.oid
    AND d.refclassid = 'pg_extension'::regclass
    AND d.deptype = 'x'
  LIMIT 1
) ext ON true
WHERE NOT t.tgisinternal
""")


# ============================================================================
# FUNCTIONS
# ============================================================================

FUNCTIONS_SQL = _wrap("functions", r"""
SELECT
  p.oid::int8 AS id,
  n.nspname AS schema,
  p.proname AS name,
  l.lanname AS language,
  p.prosrc AS definition,
  pg_get_function_arguments(p.oid) AS argument_types,
  pg_get_function_identity_arguments(p.oid) AS identity_argument_types,
  t.typname AS return_type,
  pg_get_function_result(p.oid) AS result_type,
  CASE p.provolatile
    WHEN 'i' THEN 'IMMUTABLE'
    WHEN 's' THEN 'STABLE'
    ELSE 'VOLATILE'
  END AS behavior,
  p.prosecdef AS security_definer,
  cfg.config_params,
  pg_get_userbyid(p.proowner) AS owner
FROM pg_proc p
JOIN pg_namespace n ON n.oid = p.pronamespace
JOIN pg_language l ON l.oid = p.prolang
JOIN pg_type t ON t.oid = p.prorettype
LEFT JOIN LATERAL (
  SELECT jsonb_object_agg(
    split_part(entry.setting, '=', 1),
    substr(entry.setting, strpos(entry.setting, '=') + 1)
  ) AS config_params
  FROM unnest(p.proconfig) AS entry(setting)
) cfg ON true
WHERE p.prokind = 'f'
""")


# ============================================================================
# TYPES
# ============================================================================
# Array types are kept: function arguments like "tags text[]" resolve
# through them.

TYPES_SQL = _wrap("types", r"""
SELECT
  t.oid::int8 AS id,
  t.typname AS name,
  n.nspname AS schema,
  format_type(t.oid, NULL) AS format,
  array(
    SELECT e.enumlabel::text
    FROM pg_enum e
    WHERE e.enumtypid = t.oid
    ORDER BY e.enumsortorder
  ) AS enums,
  obj_description(t.oid, 'pg_type') AS comment
FROM pg_type t
LEFT JOIN pg_namespace n ON n.oid = t.typnamespace
WHERE (t.typrelid = 0 OR (SELECT c.relkind = 'c' FROM pg_class c WHERE c.oid = t.typrelid))
""")


# ============================================================================
# POLICIES
# ============================================================================

POLICIES_SQL = _wrap("policies", r"""
SELECT
  pol.oid::int8 AS id,
  n.nspname AS schema,
  c.relname AS "table",
  c.oid::int8 AS table_id,
  pol.polname AS name,
  CASE WHEN pol.polpermissive THEN 'PERMISSIVE' ELSE 'RESTRICTIVE' END AS action,
  CASE
    WHEN pol.polroles = ARRAY[0::oid] THEN ARRAY['public']::text[]
    ELSE array(
      SELECT r.rolname::text FROM pg_roles r WHERE r.oid = ANY(pol.polroles) ORDER BY r.rolname
    )
  END AS roles,
  CASE pol.polcmd
    WHEN 'r' THEN 'SELECT'
    WHEN 'a' THEN 'INSERT'
    WHEN 'w' THEN 'UPDATE'
    WHEN 'd' THEN 'DELETE'
    ELSE 'ALL'
  END AS command,
  pg_get_expr(pol.polqual, pol.polrelid) AS definition,
  pg_get_expr(pol.polwithcheck, pol.polrelid) AS "check"
FROM pg_policy pol
JOIN pg_class c ON c.oid = pol.polrelid
JOIN pg_namespace n ON n.oid = c.relnamespace
""")


# ============================================================================
# COMPOSITION
# ============================================================================

def build_select(
    base: str,
    alias: str,
    filters: Optional[Mapping[str, Any]] = None,
    any_of: Optional[Mapping[str, Iterable[Any]]] = None,
    exclude: Optional[Mapping[str, Iterable[Any]]] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> Tuple[sql.Composed, Dict[str, Any]]:
    """
    Append WHERE/LIMIT/OFFSET to a wrapped catalog query.

    Args:
        base: One of the *_SQL constants
        alias: CTE name used in the constant ("triggers", "tables", ...)
        filters: column -> value equality filters; None values are skipped
        any_of: column -> values, row kept if the column is one of them
        exclude: column -> values, row dropped if the column is one of them
        limit: Maximum rows
        offset: Rows to skip

    Returns:
        (composed query, params) ready for QueryExecutor.query()
    """
    conditions = []
    params: Dict[str, Any] = {}

    for column, value in (filters or {}).items():
        if value is None:
            continue
        key = f"f_{column}"
        conditions.append(sql.SQL("{} = {}").format(sql.Identifier(alias, column), sql.Placeholder(key)))
        params[key] = value

    for column, values in (any_of or {}).items():
        key = f"in_{column}"
        conditions.append(sql.SQL("{} = ANY({})").format(sql.Identifier(alias, column), sql.Placeholder(key)))
        params[key] = list(values)

    for column, values in (exclude or {}).items():
        key = f"not_{column}"
        conditions.append(sql.SQL("{} <> ALL({})").format(sql.Identifier(alias, column), sql.Placeholder(key)))
        params[key] = list(values)

    query = sql.SQL(base)
    parts = [query]
    if conditions:
        parts.append(sql.SQL(" WHERE ") + sql.SQL(" AND ").join(conditions))
    if limit is not None:
        parts.append(sql.SQL(" LIMIT {}").format(sql.Placeholder("limit")))
        params["limit"] = limit
    if offset is not None:
        parts.append(sql.SQL(" OFFSET {}").format(sql.Placeholder("offset")))
        params["offset"] = offset

    return sql.Composed(parts), params


__all__ = [
    "SYSTEM_SCHEMAS",
    "SCHEMAS_SQL",
    "TABLES_SQL",
    "COLUMNS_SQL",
    "TRIGGERS_SQL",
    "FUNCTIONS_SQL",
    "TYPES_SQL",
    "POLICIES_SQL",
    "build_select",
]
