"""Déclare l'ensemble des modèles SQLAlchemy pour ``create_all`` et Alembic."""

from wordwise.db.base_class import Base

# Utilisateurs
from wordwise.models.user.user_model import User

# Vocabulaire & révision
from wordwise.models.vocabulary.vocabulary_item_model import VocabularyItem

__all__ = (
    "Base",
    "User",
    "VocabularyItem",
)
