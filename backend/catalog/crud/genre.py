from sqlalchemy import func
from sqlmodel import Session, col, select

from catalog.models.genre import Genre, GenreCreate, GenreUpdate
from catalog.models.movie import Movie


def get_genre_by_id(*, session: Session, id: int) -> Genre | None:
    """
    Retrieve a genre by its ID.

    Parameters:
        session (Session): The database session.
        id (int): The ID of the genre to retrieve.
    Returns:
        Genre | None: The genre object if found, otherwise None.
    """
    return session.get(Genre, id)


def get_genre_by_name(*, session: Session, name: str) -> Genre | None:
    """
    Retrieve a genre by its exact name.

    Parameters:
        session (Session): The database session.
        name (str): The name of the genre.
    Returns:
        Genre | None: The genre object if found, otherwise None.
    """
    stmt = select(Genre).where(col(Genre.name) == name)
    return session.exec(stmt).one_or_none()


def get_genres(*, session: Session, limit: int, offset: int) -> tuple[list[Genre], int]:
    """
    Retrieve a page of genres ordered by name, together with the total count.

    Parameters:
        session (Session): The database session.
        limit (int): The maximum number of genres to retrieve.
        offset (int): The number of genres to skip.
    Returns:
        tuple[list[Genre], int]: The genres on the page and the total number of genres.
    """
    total = session.exec(select(func.count()).select_from(Genre)).one()
    stmt = (
        select(Genre)
        .order_by(col(Genre.name), col(Genre.id))
        .limit(limit)
        .offset(offset)
    )
    genres = list(session.exec(stmt).all())
    return genres, total


def create_genre(*, session: Session, genre_create: GenreCreate) -> Genre:
    """
    Create a new genre. Raises an IntegrityError if the name is already taken.

    Parameters:
        session (Session): The database session.
        genre_create (GenreCreate): The genre data to create.
    Returns:
        Genre: The created genre object.
    Raises:
        IntegrityError: If a genre with the same name already exists.
    """
    db_obj = Genre(**genre_create.model_dump())
    session.add(db_obj)
    session.flush()  # Check for Unique Violations, generate the ID
    return db_obj


def update_genre(*, db_genre: Genre, genre_update: GenreUpdate) -> Genre:
    """
    Apply the fields that were set on the update to an existing genre. Does not flush.

    Parameters:
        db_genre (Genre): The existing genre object.
        genre_update (GenreUpdate): The fields to change.
    Returns:
        Genre: The updated genre object.
    """
    genre_data = genre_update.model_dump(exclude_unset=True)
    db_genre.sqlmodel_update(genre_data)
    return db_genre


def delete_genre(*, session: Session, db_genre: Genre) -> None:
    session.delete(db_genre)
    session.flush()


def count_movies_for_genre(*, session: Session, genre_id: int) -> int:
    stmt = select(func.count()).select_from(Movie).where(col(Movie.genre_id) == genre_id)
    return session.exec(stmt).one()
