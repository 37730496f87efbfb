from enum import Enum, unique


@unique
class EntityKind(str, Enum):
    MOVIE = "movie"
    GENRE = "genre"
    DIRECTOR = "director"


@unique
class MovieSortField(str, Enum):
    TITLE = "title"
    RELEASE_YEAR = "release_year"
    RATING = "rating"
    CREATED_AT = "created_at"


@unique
class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@unique
class CacheNamespace(str, Enum):
    MOVIES_ALL = "movies:all"
    MOVIES_BY_GENRE = "movies:genre"
    MOVIES_BY_DIRECTOR = "movies:director"
    MOVIES_POPULAR = "movies:popular"
    MOVIES_SEARCH = "movies:search"
    GENRES_ALL = "genres:all"
    DIRECTORS_ALL = "directors:all"


@unique
class CacheTier(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
