from typing import TypeVar

from sqlmodel import Session, SQLModel

from catalog.exceptions.base import ReferencedEntityNotFoundError
from catalog.models.director import Director
from catalog.models.genre import Genre

ENTITY_NAMES: dict[type[SQLModel], str] = {
    Genre: "Genre",
    Director: "Director",
}

T = TypeVar("T", Genre, Director)


def require_reference(*, session: Session, model: type[T], entity_id: int) -> T:
    """
    Look up a row another row is about to point at.

    Parameters:
        session (Session): The database session.
        model (type): The referenced table model (Genre or Director).
        entity_id (int): The ID being referenced.
    Returns:
        The referenced row.
    Raises:
        ReferencedEntityNotFoundError: If no row with that ID exists.
    """
    entity = session.get(model, entity_id)
    if entity is None:
        raise ReferencedEntityNotFoundError(ENTITY_NAMES[model], entity_id)
    return entity
