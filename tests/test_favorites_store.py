import threading

import pytest

from app.models.media import Movie
from app.services.favorites import (
    CorruptStoreError,
    FavoritesStore,
    create_favorites_store,
)
from app.stores import InMemoryKeyValueStore


def make_movie(movie_id: int, **overrides) -> Movie:
    fields = {
        "id": movie_id,
        "title": f"Movie {movie_id}",
        "overview": "An overview.",
        "poster_path": f"/poster{movie_id}.jpg",
        "vote_average": 7.0,
    }
    fields.update(overrides)
    return Movie(**fields)


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv_store):
    return FavoritesStore(kv_store)


def test_load_empty_store_returns_empty_list(store):
    assert store.load() == []


def test_default_key_is_favorites(store, kv_store):
    store.add_to_favorites(make_movie(1))
    assert "Favorites" in kv_store


def test_create_favorites_store_uses_configured_key(kv_store):
    assert create_favorites_store(kv_store).key == "Favorites"


def test_save_and_load_round_trip(store):
    movies = [make_movie(1), make_movie(2, poster_path=None, vote_average=None)]
    store.save(movies)
    assert store.load() == movies


def test_save_overwrites(store):
    store.save([make_movie(1), make_movie(2)])
    store.save([make_movie(3)])
    assert store.load() == [make_movie(3)]


def test_stored_bytes_use_camel_case_keys(store, kv_store):
    store.save([make_movie(1)])
    raw = kv_store.get("Favorites").decode("utf-8")
    assert '"posterPath"' in raw
    assert "poster_path" not in raw


def test_add_to_favorites_on_empty_store(store):
    movie = make_movie(1)
    assert store.add_to_favorites(movie) == [movie]
    assert store.load() == [movie]


def test_add_twice_keeps_duplicates(store):
    movie = make_movie(1)
    store.add_to_favorites(movie)
    store.add_to_favorites(movie)
    assert store.load() == [movie, movie]


def test_remove_preserves_order_of_others(store):
    a, b, c = make_movie(1), make_movie(2), make_movie(3)
    store.save([a, b, a, c, b])
    store.remove_from_favorites(b)
    assert store.load() == [a, a, c]


def test_remove_absent_movie_is_noop(store):
    a, b = make_movie(1), make_movie(2)
    store.save([a, b])
    store.remove_from_favorites(make_movie(99))
    assert store.load() == [a, b]


def test_remove_keeps_same_id_variant(store):
    original = make_movie(1, title="A")
    directors_cut = make_movie(1, title="A (Director's Cut)")
    store.save([original, directors_cut])

    assert store.remove_from_favorites(original) == [directors_cut]
    assert store.load() == [directors_cut]


def test_remove_by_id_matches_refreshed_copy(store):
    stored = make_movie(1, vote_average=7.0)
    store.add_to_favorites(stored)
    refreshed = make_movie(1, vote_average=7.4)
    store.remove_from_favorites(refreshed, match="id")
    assert store.load() == []


def test_remove_by_value_requires_exact_match(store):
    stored = make_movie(1, vote_average=7.0)
    other = make_movie(2)
    store.save([stored, other, stored])

    store.remove_from_favorites(make_movie(1, vote_average=7.4), match="value")
    assert store.load() == [stored, other, stored]

    store.remove_from_favorites(stored)
    assert store.load() == [other]


def test_stored_entries_read_camel_case_keys(store, kv_store):
    kv_store.set(
        "Favorites",
        b'[{"id": 1, "title": "A", "overview": "", '
        b'"posterPath": "/camel.jpg", "poster_path": "/snake.jpg"}]',
    )
    [movie] = store.load()
    assert movie.poster_path == "/camel.jpg"


def test_snake_case_keys_ignored_in_stored_entries(store, kv_store):
    kv_store.set(
        "Favorites",
        b'[{"id": 1, "title": "A", "overview": "", "vote_average": 7.0}]',
    )
    # Only the camelCase form is read back; the snake key is ignored
    [movie] = store.load()
    assert movie.vote_average is None


def test_remove_with_unknown_match_mode(store):
    with pytest.raises(ValueError):
        store.remove_from_favorites(make_movie(1), match="title")


def test_remove_by_id(store):
    store.save([make_movie(1), make_movie(2), make_movie(1)])
    assert store.remove_by_id(1) == [make_movie(2)]


def test_is_favorite(store):
    store.add_to_favorites(make_movie(5))
    assert store.is_favorite(5)
    assert not store.is_favorite(6)


@pytest.mark.parametrize(
    "raw",
    [
        b"{not json",
        b'{"title": "not a list"}',
        b'[{"title": "no id", "overview": ""}]',
    ],
)
def test_corrupt_store_raises_recoverable_error(store, kv_store, raw):
    kv_store.set("Favorites", raw)
    with pytest.raises(CorruptStoreError) as excinfo:
        store.load()
    assert excinfo.value.key == "Favorites"
    # The corrupt bytes are left in place until the caller resets
    assert kv_store.get("Favorites") == raw

    store.reset()
    assert store.load() == []


def test_mutation_on_corrupt_store_does_not_overwrite(store, kv_store):
    kv_store.set("Favorites", b"garbage")
    with pytest.raises(CorruptStoreError):
        store.add_to_favorites(make_movie(1))
    assert kv_store.get("Favorites") == b"garbage"


def test_stores_with_different_keys_are_isolated(kv_store):
    favorites = FavoritesStore(kv_store)
    watchlist = FavoritesStore(kv_store, key="Watchlist")
    favorites.add_to_favorites(make_movie(1))
    assert watchlist.load() == []


def test_interleaved_load_save_loses_update(store):
    # Wholesale rewrite: a writer that loaded before another's save drops it.
    first = store.load()
    second = store.load()
    first.append(make_movie(1))
    store.save(first)
    second.append(make_movie(2))
    store.save(second)
    assert store.load() == [make_movie(2)]


def test_concurrent_adds_through_one_store_are_not_lost(store):
    movies = [make_movie(i) for i in range(20)]
    threads = [
        threading.Thread(target=store.add_to_favorites, args=(movie,))
        for movie in movies
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(m.id for m in store.load()) == list(range(20))
