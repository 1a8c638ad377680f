# payroll_ledger/data_access/employees_repository.py

from typing import Dict, Any, List, Iterable
import sqlite3
import logging

from payroll_ledger.data_access.base_repository import BaseRepository
from payroll_ledger.data_access.database_manager import DatabaseManager
from payroll_ledger.business_logic.entities import EmployeeEntity, EMPLOYEE_ENTITY_TYPES
from payroll_ledger.constants import EmployeeType, SCHEMA_VERSION

logger = logging.getLogger(__name__)

class EmployeesRepository(BaseRepository[EmployeeEntity]):
    """
    Stores the whole employee collection as one snapshot.

    Every save replaces the previous contents inside a single transaction; every load
    returns the full ordered collection. Each variant contributes its own dataclass
    fields as columns, left NULL for rows of the other variants.
    """

    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager, table_name="employees")
        self._columns = self._all_variant_columns()

    @classmethod
    def _all_variant_columns(cls) -> List[str]:
        columns: List[str] = []
        for model_type in EMPLOYEE_ENTITY_TYPES.values():
            for column in cls._db_columns(model_type):
                if column not in columns:
                    columns.append(column)
        return columns

    def save_all(self, employees: Iterable[EmployeeEntity]) -> int:
        """Replaces the stored snapshot with `employees`, preserving their order. Returns the row count."""
        rows = []
        for position, employee in enumerate(employees):
            if employee.employee_type not in EMPLOYEE_ENTITY_TYPES:
                raise ValueError(f"Unsupported employee type: {employee.employee_type}")
            row = {column: None for column in self._columns}
            row.update(self._entity_to_dict_for_db(employee))
            row["position"] = position
            row["employee_type"] = employee.employee_type.value
            rows.append(row)

        column_names = ["position", "employee_type"] + self._columns
        placeholders = ', '.join(['?'] * len(column_names))
        insert_query = f"INSERT INTO {self._table_name} ({', '.join(column_names)}) VALUES ({placeholders})"

        with self.db_manager as conn:
            try:
                self.db_manager.create_tables(conn, self._columns)
                conn.execute(f"DELETE FROM {self._table_name}")
                conn.executemany(insert_query, [tuple(row[c] for c in column_names) for row in rows])
                conn.execute(
                    "INSERT OR REPLACE INTO schema_info (key, value) VALUES (?, ?)",
                    ("schema_version", str(SCHEMA_VERSION))
                )
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Error writing snapshot to {self.db_manager.db_path}: {e}", exc_info=True)
                raise

        logger.info(f"Snapshot of {len(rows)} employee(s) written to {self.db_manager.db_path}.")
        return len(rows)

    def get_schema_version(self) -> int:
        row = self.db_manager.fetch_one("SELECT value FROM schema_info WHERE key = ?", ("schema_version",))
        if row is None:
            raise ValueError(f"Snapshot {self.db_manager.db_path} has no schema version.")
        return int(row["value"])

    def load_all(self) -> List[EmployeeEntity]:
        """
        Reads the stored snapshot back in its saved order.
        Raises ValueError for an unknown schema version or an unreadable row.
        """
        version = self.get_schema_version()
        if version != SCHEMA_VERSION:
            raise ValueError(f"Unsupported snapshot schema version {version} (expected {SCHEMA_VERSION}).")

        rows = self.db_manager.fetch_all(f"SELECT * FROM {self._table_name} ORDER BY position")
        employees = [self._employee_from_row(dict(row)) for row in rows]
        logger.debug(f"Loaded {len(employees)} employee(s) from {self.db_manager.db_path}.")
        return employees

    def _employee_from_row(self, row: Dict[str, Any]) -> EmployeeEntity:
        try:
            employee_type = EmployeeType(row['employee_type'])
        except (KeyError, ValueError) as e:
            logger.error(f"Unknown employee type in row: {row}")
            raise ValueError(f"Unknown employee type: {row.get('employee_type')!r}") from e
        return self._entity_from_row(EMPLOYEE_ENTITY_TYPES[employee_type], row)
