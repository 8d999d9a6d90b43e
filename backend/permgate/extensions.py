# Overview: Flask extension instances; bound to an app in create_app().
# Models, services and the Alembic migration all share this db handle.

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

db = SQLAlchemy()
migrate = Migrate(compare_type=True)
