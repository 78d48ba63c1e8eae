"""
Taxonomy app services layer: expense categories and tags.
"""

from .exceptions import (
    TaxonomyServiceError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    CategoryInUseError,
    TagNotFoundError,
    DuplicateTagError,
)

from .category_management import (
    normalize_category_name,
    list_categories,
    get_category,
    category_usage_count,
    create_category,
    update_category,
    delete_category,
)

from .tag_management import (
    list_tags,
    get_tag,
    create_tag,
    update_tag,
    delete_tag,
)


__all__ = [
    # Exceptions
    'TaxonomyServiceError',
    'CategoryNotFoundError',
    'DuplicateCategoryError',
    'CategoryInUseError',
    'TagNotFoundError',
    'DuplicateTagError',

    # Categories
    'normalize_category_name',
    'list_categories',
    'get_category',
    'category_usage_count',
    'create_category',
    'update_category',
    'delete_category',

    # Tags
    'list_tags',
    'get_tag',
    'create_tag',
    'update_tag',
    'delete_tag',
]
