from .director import (
    count_movies_for_director,
    create_director,
    delete_director,
    get_director_by_id,
    get_director_by_name,
    get_directors,
    update_director,
)
from .genre import (
    count_movies_for_genre,
    create_genre,
    delete_genre,
    get_genre_by_id,
    get_genre_by_name,
    get_genres,
    update_genre,
)
from .movie import (
    create_movie,
    delete_movie,
    get_movie_by_id,
    get_movies,
    get_movies_by_director,
    get_movies_by_genre,
    get_popular_movies,
    update_movie,
)
