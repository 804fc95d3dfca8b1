import pytest
from unittest.mock import MagicMock
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from sluggable.db.adapters import SqlAlchemySlugStore
from sluggable.exceptions import InvalidMaximumLengthError
from sluggable.models.options import SlugOptions
from sluggable.services.generator import SlugGenerator
from sluggable.services.lifecycle import SlugLifecycle, save_with_slug
from sluggable.services.records import MappingRecord


def title_record(options, **values):
    return MappingRecord(values, options=lambda r: options)


@pytest.fixture
def lifecycle(memory_store):
    return SlugLifecycle(SlugGenerator(memory_store))


def test_before_create_generates(lifecycle):
    record = title_record(SlugOptions.create().generate_slugs_from("title").save_slugs_to("slug"), title="Hello")
    assert lifecycle.before_create(record) == "hello"


def test_before_update_respects_flag(lifecycle):
    options = SlugOptions.create().generate_slugs_from("title").save_slugs_to("slug").do_not_generate_slugs_on_update()
    record = title_record(options, id=1, title="Hello")
    assert lifecycle.before_update(record) is None
    assert lifecycle.generate_now(record) == "hello"


def test_guard_failure_propagates_from_trigger(lifecycle):
    options = SlugOptions.create().generate_slugs_from("title").save_slugs_to("slug").slugs_should_be_no_longer_than(0)
    with pytest.raises(InvalidMaximumLengthError):
        lifecycle.before_create(title_record(options, title="Hello"))


# --- save_with_slug against SQLite ---

def test_save_with_slug_persists_new_record(db_session, post_model):
    post = post_model(title="My Post")
    save_with_slug(db_session, post)
    db_session.commit()

    assert post.id is not None
    assert post.slug == "my-post"


def test_save_with_slug_resolves_existing_collision(db_session, post_model):
    save_with_slug(db_session, post_model(title="My Post"))
    second = save_with_slug(db_session, post_model(title="My Post"))
    db_session.commit()
    assert second.slug == "my-post-1"


def test_save_with_slug_update_regenerates_from_changed_source(db_session, post_model):
    post = save_with_slug(db_session, post_model(title="Old Title"))
    db_session.commit()

    post.title = "New Title"
    save_with_slug(db_session, post)
    db_session.commit()

    assert post.slug == "new-title"


def test_save_with_slug_keeps_custom_slug_on_update(db_session, post_model):
    post = save_with_slug(db_session, post_model(title="Old Title"))
    db_session.commit()

    post.title = "New Title"
    post.slug = "hand-picked"
    save_with_slug(db_session, post)
    db_session.commit()

    assert post.slug == "hand-picked"


def test_save_with_slug_guard_failure_aborts_save(db_session, broken_model):
    record = broken_model(title="Hello")
    with pytest.raises(InvalidMaximumLengthError):
        save_with_slug(db_session, record)
    assert record.slug is None
    assert db_session.query(broken_model).count() == 0


def test_save_with_slug_retries_after_concurrent_insert(db_session, post_model, mocker):
    save_with_slug(db_session, post_model(title="My Post"))
    db_session.commit()
    # First check misses the row, as if it were committed right after the lookup.
    mocker.patch.object(SqlAlchemySlugStore, "exists", autospec=True, side_effect=[False, True, False])

    post = save_with_slug(db_session, post_model(title="My Post"))
    db_session.commit()

    assert post.slug == "my-post-1"
    assert db_session.query(post_model).count() == 2


def test_save_with_slug_reraises_after_last_attempt(post_model):
    session = MagicMock(spec=Session)
    session.execute.return_value.first.return_value = None
    session.flush.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    with pytest.raises(IntegrityError):
        save_with_slug(session, post_model(title="My Post"), attempts=2)
    assert session.flush.call_count == 2


def test_save_with_slug_retry_with_mocked_session(post_model):
    session = MagicMock(spec=Session)
    session.execute.return_value.first.side_effect = [None, (7,), None]
    session.flush.side_effect = [IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed")), None]

    post = save_with_slug(session, post_model(title="My Post"), creating=True)

    assert post.slug == "my-post-1"
    assert session.flush.call_count == 2
