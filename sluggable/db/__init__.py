# sluggable/db/__init__.py

# Import Base from base_class, making it accessible via sluggable.db.Base
from .base_class import Base
from .adapters import OrmRecord, SqlAlchemySlugStore
from .mixins import SluggableMixin
