"""Application factories for repository access."""

from revenue.application.factories.repository_factory import RepositoryFactory

__all__ = ["RepositoryFactory"]
