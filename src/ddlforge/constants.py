"""
Centralized constants for DDLForge.

Import from here instead of hardcoding values.
"""

# ===========================================================================
# Dialect selectors
# ===========================================================================
DEFAULT_DIALECT = "sqlserver"

# Alternative spellings accepted wherever a dialect name is parsed
DIALECT_ALIASES = {
    "mssql": "sqlserver",
    "tsql": "sqlserver",
    "mariadb": "mysql",
    "postgres": "postgresql",
    "pgsql": "postgresql",
    "sqlite3": "sqlite",
}

# Environment variable overriding the configured default dialect
DIALECT_ENV_VAR = "DDLFORGE_DIALECT"

# ===========================================================================
# Column defaults (Blueprint)
# ===========================================================================
DEFAULT_STRING_LENGTH = 200
DEFAULT_DECIMAL_PRECISION = 8
DEFAULT_DECIMAL_SCALE = 2

# ===========================================================================
# Identifiers
# ===========================================================================
# Names matching this pattern may be emitted without quote characters
PLAIN_IDENTIFIER_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"

# Keywords that are quoted even when they look like plain identifiers
SQL_RESERVED_WORDS = frozenset("""
    ADD ALL ALTER AND ANY AS ASC BETWEEN BOTH BY CASE CAST CHECK COLLATE COLUMN
    CONSTRAINT CREATE CROSS CURRENT_DATE CURRENT_TIME CURRENT_TIMESTAMP
    CURRENT_USER DEFAULT DELETE DESC DISTINCT DROP ELSE END EXCEPT EXISTS FALSE
    FETCH FOR FOREIGN FROM FULL GRANT GROUP HAVING IN INNER INSERT INTERSECT
    INTO IS JOIN KEY LEADING LEFT LIKE LIMIT NATURAL NOT NULL OFFSET ON OR
    ORDER OUTER PRIMARY REFERENCES RIGHT SELECT SET TABLE THEN TO TRAILING TRUE
    UNION UNIQUE UPDATE USER USING VALUES WHEN WHERE WITH
""".split())

SQLSERVER_RESERVED_WORDS = SQL_RESERVED_WORDS | frozenset("""
    BACKUP BEGIN BREAK BROWSE BULK CASCADE CLUSTERED COMMIT COMPUTE CONTAINS
    CONTINUE CONVERT DATABASE DBCC DECLARE DENY DISK DUMP ERRLVL ESCAPE EXEC
    EXECUTE EXIT FILE FILLFACTOR FREETEXT FUNCTION GOTO HOLDLOCK IDENTITY IF
    INDEX KILL LINENO MERGE NOCHECK NONCLUSTERED OPEN OPTION OVER PERCENT PIVOT
    PLAN PRINT PROC PROCEDURE PUBLIC RAISERROR READ RESTORE RETURN REVOKE
    ROWCOUNT RULE SAVE SCHEMA SHUTDOWN STATISTICS TOP TRAN TRANSACTION TRIGGER
    TRUNCATE USE VIEW WAITFOR WHILE
""".split())

MYSQL_RESERVED_WORDS = SQL_RESERVED_WORDS | frozenset("""
    ACCESSIBLE ANALYZE BEFORE BIGINT BLOB CALL CHANGE CHAR CHARACTER CONDITION
    CONVERT DATABASE DATABASES DEC DECIMAL DECLARE DELAYED DESCRIBE DIV DOUBLE
    DUAL EACH ELSEIF ENCLOSED ESCAPED EXIT EXPLAIN FLOAT FORCE FULLTEXT
    GENERATED GROUPS IF IGNORE INDEX INFILE INT INTEGER INTERVAL ITERATE KEYS
    KILL LEAVE LINES LOAD LOCK LONG LOOP MATCH MOD OPTIMIZE OPTION PARTITION
    PROCEDURE RANGE RANK READ REGEXP RELEASE RENAME REPEAT REPLACE REQUIRE
    RESTRICT RETURN REVOKE RLIKE ROW ROWS SCHEMA SEPARATOR SHOW SPATIAL SQL
    STARTING TRIGGER UNDO UNLOCK UNSIGNED USAGE USE VARCHAR WHILE WRITE XOR
    ZEROFILL
""".split())

POSTGRESQL_RESERVED_WORDS = SQL_RESERVED_WORDS | frozenset("""
    ANALYSE ANALYZE ARRAY ASYMMETRIC AUTHORIZATION BINARY COLLATION CONCURRENTLY
    CURRENT_CATALOG CURRENT_ROLE CURRENT_SCHEMA DEFERRABLE DO FREEZE ILIKE
    INITIALLY ISNULL LATERAL LOCALTIME LOCALTIMESTAMP NOTNULL ONLY OVERLAPS
    PLACING RETURNING SESSION_USER SIMILAR SOME SYMMETRIC TABLESAMPLE VARIADIC
    VERBOSE WINDOW
""".split())

SQLITE_RESERVED_WORDS = SQL_RESERVED_WORDS | frozenset("""
    ABORT ACTION AFTER ATTACH AUTOINCREMENT BEFORE BEGIN CASCADE COMMIT CONFLICT
    DATABASE DEFERRABLE DEFERRED DETACH EACH ESCAPE EXCLUSIVE EXPLAIN FAIL GLOB
    IF IGNORE IMMEDIATE INDEX INDEXED INITIALLY INSTEAD ISNULL NOTNULL PLAN
    PRAGMA QUERY RAISE RECURSIVE REGEXP REINDEX RELEASE RENAME REPLACE RESTRICT
    ROLLBACK ROW SAVEPOINT TEMP TEMPORARY TRANSACTION TRIGGER VACUUM VIEW
    VIRTUAL
""".split())

# Referential actions accepted on foreign keys
REFERENTIAL_ACTIONS = ("CASCADE", "SET NULL", "SET DEFAULT", "RESTRICT", "NO ACTION")

# ===========================================================================
# Full-text
# ===========================================================================
POSTGRES_FULLTEXT_LANGUAGE = "english"

# ===========================================================================
# Script rendering
# ===========================================================================
STATEMENT_TERMINATOR = ";"
SQLSERVER_BATCH_SEPARATOR = "GO"
FORMAT_INDENT_WIDTH = 4
FORMAT_KEYWORD_CASE = "upper"
