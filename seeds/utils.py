from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from sqlmodel import Session, SQLModel, select

ModelT = TypeVar("ModelT", bound=SQLModel)


def get_or_create(
    session: Session,
    model: Type[ModelT],
    defaults: Optional[Dict[str, Any]] = None,
    **kwargs: Any,
) -> Tuple[ModelT, bool]:
    statement = select(model)
    for field, value in kwargs.items():
        statement = statement.where(getattr(model, field) == value)
    instance = session.exec(statement).first()
    if instance:
        return instance, False

    params = {**kwargs, **(defaults or {})}
    instance = model(**params)
    session.add(instance)
    session.flush()
    return instance, True
