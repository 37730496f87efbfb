from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from catalog.models.director import Director, DirectorCreate, DirectorUpdate
from catalog.models.movie import Movie
from catalog.utils import LIKE_ESCAPE, contains_pattern


def get_director_by_id(*, session: Session, id: int) -> Director | None:
    """
    Retrieve a director by its ID.

    Parameters:
        session (Session): The database session.
        id (int): The ID of the director to retrieve.
    Returns:
        Director | None: The director object if found, otherwise None.
    """
    return session.get(Director, id)


def get_director_by_name(
    *,
    session: Session,
    first_name: str,
    last_name: str,
) -> Director | None:
    stmt = select(Director).where(
        col(Director.first_name) == first_name,
        col(Director.last_name) == last_name,
    )
    return session.exec(stmt).first()


def get_directors(
    *,
    session: Session,
    limit: int,
    offset: int,
    search: str | None = None,
) -> tuple[list[Director], int]:
    """
    Retrieve a page of directors ordered by last name and first name.

    Parameters:
        session (Session): The database session.
        limit (int): The maximum number of directors to retrieve.
        offset (int): The number of directors to skip.
        search (str | None): Case-insensitive substring of the first or last name.
    Returns:
        tuple[list[Director], int]: The directors on the page and the total number of matches.
    """
    stmt = select(Director)
    if search:
        pattern = contains_pattern(search)
        stmt = stmt.where(
            or_(
                col(Director.first_name).ilike(pattern, escape=LIKE_ESCAPE),
                col(Director.last_name).ilike(pattern, escape=LIKE_ESCAPE),
            )
        )

    total = session.exec(select(func.count()).select_from(stmt.subquery())).one()

    stmt = (
        stmt.order_by(
            col(Director.last_name), col(Director.first_name), col(Director.id)
        )
        .limit(limit)
        .offset(offset)
    )
    directors = list(session.exec(stmt).all())
    return directors, total


def create_director(*, session: Session, director_create: DirectorCreate) -> Director:
    """
    Create a new director and flush to generate its ID.

    Parameters:
        session (Session): The database session.
        director_create (DirectorCreate): The director data to create.
    Returns:
        Director: The created director object.
    """
    db_obj = Director(**director_create.model_dump())
    session.add(db_obj)
    session.flush()
    return db_obj


def update_director(
    *, db_director: Director, director_update: DirectorUpdate
) -> Director:
    """
    Apply the fields that were set on the update to an existing director. Does not flush.

    Parameters:
        db_director (Director): The existing director object.
        director_update (DirectorUpdate): The fields to change.
    Returns:
        Director: The updated director object.
    """
    director_data = director_update.model_dump(exclude_unset=True)
    db_director.sqlmodel_update(director_data)
    return db_director


def delete_director(*, session: Session, db_director: Director) -> None:
    session.delete(db_director)
    session.flush()


def count_movies_for_director(*, session: Session, director_id: int) -> int:
    stmt = (
        select(func.count())
        .select_from(Movie)
        .where(col(Movie.director_id) == director_id)
    )
    return session.exec(stmt).one()
