# payroll_ledger/data_access/base_repository.py

from typing import Generic, TypeVar, Type, List, Dict, Any, Union
from datetime import date
from dataclasses import fields, MISSING
import logging

from payroll_ledger.data_access.database_manager import DatabaseManager

logger = logging.getLogger(__name__)

T = TypeVar('T')

class BaseRepository(Generic[T]):
    """Converts dataclass entities to sqlite rows and back, field by field."""

    def __init__(self, db_manager: DatabaseManager, table_name: str):
        if db_manager is None: raise ValueError("db_manager cannot be None")
        self.db_manager = db_manager
        self._table_name = table_name

    @staticmethod
    def _db_columns(model_type: Type[T]) -> List[str]:
        return [f.name for f in fields(model_type) if f.init]

    @staticmethod
    def _to_db_value(value: Any) -> Any:
        if isinstance(value, bool): return 1 if value else 0
        if isinstance(value, date): return value.isoformat()
        return value

    def _entity_to_dict_for_db(self, entity: T) -> Dict[str, Any]:
        """Maps every init field of the entity to a value sqlite can store."""
        return {col: self._to_db_value(getattr(entity, col, None)) for col in self._db_columns(type(entity))}

    @staticmethod
    def _unwrap_optional(field_type: Any) -> Any:
        if getattr(field_type, '__origin__', None) is Union:
            possible_types = [arg for arg in getattr(field_type, '__args__', []) if arg is not type(None)]
            if possible_types:
                return possible_types[0]
        return field_type

    def _entity_from_row(self, model_type: Type[T], row: Dict[str, Any]) -> T:
        """
        Builds an entity of `model_type` from a row dictionary.
        Raises ValueError when a required field is NULL or a value cannot be converted.
        """
        entity_data = {}

        for f in fields(model_type):
            if not f.init:
                continue

            field_name = f.name
            value_from_db = row.get(field_name)

            if value_from_db is None:
                if f.default is MISSING and f.default_factory is MISSING:
                    raise ValueError(
                        f"Integrity error: NULL value found for required field '{field_name}' "
                        f"in table '{self._table_name}' for row: {row}"
                    )
                continue

            actual_type = self._unwrap_optional(f.type)
            try:
                if actual_type == date:
                    entity_data[field_name] = date.fromisoformat(value_from_db)
                elif actual_type == bool:
                    entity_data[field_name] = bool(value_from_db)
                elif actual_type == float:
                    entity_data[field_name] = float(value_from_db)
                elif actual_type == int:
                    entity_data[field_name] = int(value_from_db)
                else:
                    entity_data[field_name] = value_from_db
            except (ValueError, TypeError) as e:
                logger.error(f"Type conversion failed for field '{field_name}' with value '{value_from_db}'. Error: {e}")
                raise ValueError(f"Invalid value for '{field_name}' in table '{self._table_name}': {value_from_db!r}") from e

        try:
            return model_type(**entity_data)
        except TypeError as e:
            logger.error(f"Failed to instantiate {model_type.__name__}. Error: {e}. Data passed: {entity_data}")
            raise ValueError(f"Could not rebuild {model_type.__name__} from stored row. Original error: {e}") from e
