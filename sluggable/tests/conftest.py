import pytest
from sqlalchemy import Column, Integer, String, JSON, create_engine, event
from sqlalchemy.orm import sessionmaker

from sluggable.db.base_class import Base
from sluggable.db.mixins import SluggableMixin
from sluggable.models.options import SlugOptions
from sluggable.services.records import InMemorySlugStore


# --- ORM models used by the db/services tests ---

class PostOrm(SluggableMixin, Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=True)
    subtitle = Column(String(255), nullable=True)
    slug = Column(String(255), nullable=True, unique=True)

    def get_slug_options(self) -> SlugOptions:
        return SlugOptions.create().generate_slugs_from("title").save_slugs_to("slug")


class ArticleOrm(SluggableMixin, Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(JSON, nullable=True)
    slug = Column(JSON, nullable=True)

    def get_slug_options(self) -> SlugOptions:
        return SlugOptions.create().generate_slugs_from_translatable("name").save_slugs_to("slug")


class BrokenOrm(SluggableMixin, Base):
    __tablename__ = "broken_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=True)
    slug = Column(String(255), nullable=True)

    def get_slug_options(self) -> SlugOptions:
        return SlugOptions.create().generate_slugs_from("title").save_slugs_to("slug").slugs_should_be_no_longer_than(0)


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")

    # pysqlite needs this to honour SAVEPOINT / begin_nested().
    @event.listens_for(engine, "connect")
    def _connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = SessionLocal()
    yield session
    session.close()


# --- In-memory records ---

@pytest.fixture
def memory_store():
    return InMemorySlugStore()


@pytest.fixture
def post_model():
    return PostOrm


@pytest.fixture
def article_model():
    return ArticleOrm


@pytest.fixture
def broken_model():
    return BrokenOrm
