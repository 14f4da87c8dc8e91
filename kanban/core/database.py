from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from kanban.core.config import settings

engine = create_engine(settings.DATABASE_URL, echo=False)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def init_db(bind=None):
    """Crée les tables du stockage clé-valeur"""
    import kanban.models.storage_entry  # noqa: F401  enregistre la table
    Base.metadata.create_all(bind=bind or engine)
