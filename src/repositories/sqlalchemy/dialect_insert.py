from typing import Any, Dict, List

from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.orm import Session

_INSERT_BY_DIALECT = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
    "mysql": mysql.insert,
    "mariadb": mysql.insert,
}


def _dialect_insert(db: Session, model):
    dialect = db.get_bind().dialect.name
    try:
        return dialect, _INSERT_BY_DIALECT[dialect](model)
    except KeyError:
        raise NotImplementedError(f"Conflict-tolerant insert is not supported for dialect '{dialect}'.")


def insert_ignore(db: Session, model, values: Dict[str, Any], index_elements: List[str]) -> bool:
    """
    INSERT ... ON CONFLICT DO NOTHING (MySQL/MariaDB는 INSERT IGNORE).
    동시에 같은 키로 삽입해도 예외 없이 한 행만 남습니다.

    MySQL 드라이버는 CLIENT_FOUND_ROWS를 켜므로 ON DUPLICATE KEY UPDATE의 rowcount로는
    삽입 여부를 구분할 수 없습니다. INSERT IGNORE는 무시된 행을 0으로 셉니다.

    Returns:
        새 행이 삽입되었으면 True.
    """
    dialect, stmt = _dialect_insert(db, model)
    stmt = stmt.values(**values)
    if dialect in ("mysql", "mariadb"):
        stmt = stmt.prefix_with("IGNORE")
    else:
        stmt = stmt.on_conflict_do_nothing(index_elements=index_elements)
    result = db.execute(stmt)
    return result.rowcount == 1


def upsert(db: Session, model, values: Dict[str, Any], index_elements: List[str], update_columns: List[str]):
    """INSERT ... ON CONFLICT DO UPDATE: 키가 이미 있으면 update_columns만 덮어씁니다."""
    dialect, stmt = _dialect_insert(db, model)
    stmt = stmt.values(**values)
    if dialect in ("mysql", "mariadb"):
        stmt = stmt.on_duplicate_key_update({col: stmt.inserted[col] for col in update_columns})
    else:
        stmt = stmt.on_conflict_do_update(
            index_elements=index_elements,
            set_={col: stmt.excluded[col] for col in update_columns},
        )
    db.execute(stmt)
