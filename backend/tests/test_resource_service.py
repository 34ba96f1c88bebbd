"""
Mflix API - Resource Service Unit Tests
========================================

What:  Tests for the shared request skeleton and the three resource families.
How:   Services run against the in-memory store fakes from conftest.py
       (no HTTP, no MongoDB).

What we test:
    ✅ Malformed ids raise ValidationError before any store access
    ✅ Valid but absent ids raise NotFoundError on get / update / delete
    ✅ Listings are capped at 10
    ✅ Comments are scoped to their movie (mismatch → not found)
    ✅ Create / update write the typed document; update answers 200
    ✅ Store failures become StoreError carrying the driver message
    ✅ Optional parent existence check for comments
"""

import pytest
from bson import ObjectId

from mflix_api.exceptions import NotFoundError, StoreError, ValidationError
from mflix_api.models.documents import CommentDocument, MovieDocument, TheaterDocument
from mflix_api.services.comment_service import CommentService
from mflix_api.services.movie_service import MovieService
from mflix_api.services.theater_service import TheaterService

ABSENT_ID = "000000000000000000000000"


class TestMovieService:

    @pytest.mark.asyncio
    async def test_list_is_capped_at_ten(self, memory_store):
        for i in range(25):
            memory_store.seed("movies", {"title": f"Movie {i}"})

        envelope = await MovieService(memory_store).list_documents()

        assert envelope.status == 200
        assert len(envelope.data["movies"]) == 10

    @pytest.mark.asyncio
    async def test_list_empty_collection(self, memory_store):
        envelope = await MovieService(memory_store).list_documents()
        assert envelope.data == {"movies": []}

    @pytest.mark.asyncio
    async def test_get_existing(self, memory_store):
        oid = memory_store.seed("movies", {"title": "Blacksmith Scene", "year": 1893})

        envelope = await MovieService(memory_store).get_document(str(oid))

        assert envelope.status == 200
        assert envelope.data["movie"]["title"] == "Blacksmith Scene"
        assert envelope.message is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["get", "delete"])
    async def test_malformed_id_never_reaches_store(self, untouchable_store, operation):
        service = MovieService(untouchable_store)
        call = service.get_document if operation == "get" else service.delete_document

        with pytest.raises(ValidationError, match="Invalid movie ID"):
            await call("not-an-object-id")

    @pytest.mark.asyncio
    async def test_absent_id_is_not_found(self, memory_store):
        service = MovieService(memory_store)
        with pytest.raises(NotFoundError) as exc_info:
            await service.get_document(ABSENT_ID)
        assert exc_info.value.message == "Movie not found"
        assert exc_info.value.error == "No movie found with the given ID"

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, memory_store, sample_movie):
        service = MovieService(memory_store)

        created = await service.create_document(
            MovieDocument(**sample_movie), resource_id=str(ObjectId())
        )
        new_id = created.data["movie"]["_id"]
        fetched = await service.get_document(str(new_id))

        assert created.status == 201
        assert created.message == "Movie created successfully"
        stored = dict(fetched.data["movie"])
        assert stored.pop("_id") == new_id
        assert stored == sample_movie

    @pytest.mark.asyncio
    async def test_create_uses_store_assigned_id(self, memory_store, sample_movie):
        path_id = str(ObjectId())
        created = await MovieService(memory_store).create_document(
            MovieDocument(**sample_movie), resource_id=path_id
        )
        assert str(created.data["movie"]["_id"]) != path_id

    @pytest.mark.asyncio
    async def test_update_replaces_whole_document(self, memory_store):
        oid = memory_store.seed(
            "movies", {"title": "Old", "year": 1999, "plot": "to be dropped"}
        )

        envelope = await MovieService(memory_store).update_document(
            str(oid), MovieDocument(title="New", year=2000)
        )

        assert envelope.status == 200
        assert envelope.message == "Movie updated successfully"
        stored = memory_store.collections["movies"][0]
        assert stored == {"_id": oid, "title": "New", "year": 2000, "genre": []}

    @pytest.mark.asyncio
    async def test_update_absent_is_not_found(self, memory_store):
        with pytest.raises(NotFoundError):
            await MovieService(memory_store).update_document(ABSENT_ID, MovieDocument(title="x"))

    @pytest.mark.asyncio
    async def test_delete(self, memory_store):
        oid = memory_store.seed("movies", {"title": "Doomed"})

        envelope = await MovieService(memory_store).delete_document(str(oid))

        assert envelope.status == 200
        assert envelope.data == {"movie_id": oid, "deleted_count": 1}
        assert memory_store.collections["movies"] == []

    @pytest.mark.asyncio
    async def test_delete_absent_is_not_found(self, memory_store):
        with pytest.raises(NotFoundError):
            await MovieService(memory_store).delete_document(ABSENT_ID)

    @pytest.mark.asyncio
    async def test_store_failure_becomes_store_error(self, broken_store):
        with pytest.raises(StoreError) as exc_info:
            await MovieService(broken_store).list_documents()
        assert exc_info.value.message == "Internal Server Error"
        assert exc_info.value.error == "connection closed by server"


class TestTheaterService:

    @pytest.mark.asyncio
    async def test_create_and_delete(self, memory_store, sample_theater):
        service = TheaterService(memory_store)

        created = await service.create_document(
            TheaterDocument(**sample_theater), resource_id=str(ObjectId())
        )
        theater = created.data["theater"]
        assert theater["location"]["address"]["city"] == "Bloomington"
        assert theater["location"]["geo"]["coordinates"] == [-93.24565, 44.85466]

        deleted = await service.delete_document(str(theater["_id"]))
        assert deleted.data["deleted_count"] == 1

    @pytest.mark.asyncio
    async def test_absent_delete_is_not_found(self, memory_store):
        with pytest.raises(NotFoundError) as exc_info:
            await TheaterService(memory_store).delete_document(ABSENT_ID)
        assert exc_info.value.message == "Theater not found"


class TestCommentService:

    def seed_comment(self, store, movie_id, text="Great"):
        return store.seed(
            "comments",
            {"name": "A", "email": "a@b.c", "text": text, "movie_id": movie_id},
        )

    @pytest.mark.asyncio
    async def test_list_is_scoped_to_movie_and_capped(self, memory_store):
        movie, other = ObjectId(), ObjectId()
        for _ in range(12):
            self.seed_comment(memory_store, movie)
        self.seed_comment(memory_store, other, text="elsewhere")

        envelope = await CommentService(memory_store).list_documents(parent_id=str(movie))

        comments = envelope.data["comments"]
        assert len(comments) == 10
        assert all(c["movie_id"] == movie for c in comments)

    @pytest.mark.asyncio
    async def test_get_under_wrong_movie_is_not_found(self, memory_store):
        movie, other = ObjectId(), ObjectId()
        comment = self.seed_comment(memory_store, movie)
        service = CommentService(memory_store)

        found = await service.get_document(str(comment), parent_id=str(movie))
        assert found.status == 200

        with pytest.raises(NotFoundError, match="Comment not found"):
            await service.get_document(str(comment), parent_id=str(other))

    @pytest.mark.asyncio
    async def test_movie_id_is_validated_first(self, untouchable_store):
        with pytest.raises(ValidationError, match="Invalid movie ID"):
            await CommentService(untouchable_store).get_document("bad", parent_id="bad")

    @pytest.mark.asyncio
    async def test_comment_id_is_validated_before_store(self, untouchable_store):
        with pytest.raises(ValidationError, match="Invalid comment ID"):
            await CommentService(untouchable_store).delete_document(
                "bad", parent_id=str(ObjectId())
            )

    @pytest.mark.asyncio
    async def test_create_sets_movie_id_from_path(self, memory_store, sample_comment):
        movie = ObjectId()

        envelope = await CommentService(memory_store).create_document(
            CommentDocument(**sample_comment),
            resource_id=str(ObjectId()),
            parent_id=str(movie),
        )

        assert envelope.status == 201
        assert envelope.data["comment"]["movie_id"] == movie
        assert memory_store.collections["comments"][0]["movie_id"] == movie

    @pytest.mark.asyncio
    async def test_update_under_wrong_movie_is_not_found(self, memory_store, sample_comment):
        comment = self.seed_comment(memory_store, ObjectId())

        with pytest.raises(NotFoundError):
            await CommentService(memory_store).update_document(
                str(comment), CommentDocument(**sample_comment), parent_id=str(ObjectId())
            )

    @pytest.mark.asyncio
    async def test_delete_under_wrong_movie_keeps_comment(self, memory_store):
        comment = self.seed_comment(memory_store, ObjectId())

        with pytest.raises(NotFoundError):
            await CommentService(memory_store).delete_document(
                str(comment), parent_id=str(ObjectId())
            )
        assert len(memory_store.collections["comments"]) == 1

    @pytest.mark.asyncio
    async def test_parent_not_checked_by_default(self, memory_store, sample_comment):
        envelope = await CommentService(memory_store, enforce_parent=False).create_document(
            CommentDocument(**sample_comment),
            resource_id=str(ObjectId()),
            parent_id=ABSENT_ID,
        )
        assert envelope.status == 201

    @pytest.mark.asyncio
    async def test_enforced_parent_must_exist(self, memory_store, sample_comment):
        service = CommentService(memory_store, enforce_parent=True)

        with pytest.raises(NotFoundError, match="Movie not found"):
            await service.create_document(
                CommentDocument(**sample_comment),
                resource_id=str(ObjectId()),
                parent_id=ABSENT_ID,
            )
        assert "comments" not in memory_store.collections

        movie = memory_store.seed("movies", {"title": "Exists"})
        envelope = await service.create_document(
            CommentDocument(**sample_comment),
            resource_id=str(ObjectId()),
            parent_id=str(movie),
        )
        assert envelope.status == 201
