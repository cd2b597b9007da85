from typing import Any, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session

from certportal.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchema = TypeVar("CreateSchema", bound=BaseModel)
UpdateSchema = TypeVar("UpdateSchema", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchema, UpdateSchema]):
    """Operações atômicas de um registro só: cada escrita faz o próprio commit."""

    def __init__(self, model: Type[ModelType]): self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.get(self.model, id)

    def create(self, db: Session, obj_in: CreateSchema) -> ModelType:
        data = obj_in.model_dump()
        obj = self.model(**data)
        db.add(obj); db.commit(); db.refresh(obj)
        return obj

    def update(self, db: Session, db_obj: ModelType, obj_in: UpdateSchema | Dict[str, Any]) -> ModelType:
        # campos omitidos (ou nulos) ficam como estão
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True, exclude_none=True)
        for f, v in data.items(): setattr(db_obj, f, v)
        db.add(db_obj); db.commit(); db.refresh(db_obj)
        return db_obj

    def remove(self, db: Session, id: Any) -> Optional[ModelType]:
        obj = self.get(db, id)
        if not obj: return None
        db.delete(obj); db.commit(); return obj
