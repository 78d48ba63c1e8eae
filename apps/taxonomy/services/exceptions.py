"""
Domain-specific exceptions for taxonomy app.
"""

from apps.common.exceptions import Conflict, NotFound


class TaxonomyServiceError(Exception):
    """Base exception for category and tag service errors."""
    pass


class CategoryNotFoundError(TaxonomyServiceError, NotFound):
    default_detail = 'Category not found.'


class DuplicateCategoryError(TaxonomyServiceError, Conflict):
    default_detail = 'A category with this name already exists.'


class CategoryInUseError(TaxonomyServiceError, Conflict):
    """Raised when deleting a category that purchases still reference."""
    default_detail = 'Cannot delete category that is in use.'


class TagNotFoundError(TaxonomyServiceError, NotFound):
    default_detail = 'Tag not found.'


class DuplicateTagError(TaxonomyServiceError, Conflict):
    default_detail = 'A tag with this name already exists.'
