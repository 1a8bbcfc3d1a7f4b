from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Note: app.db.models imports every model so Base.metadata sees all tables
# All models must import Base from this module
