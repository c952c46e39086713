"""Category service for document store operations."""

from decimal import Decimal, InvalidOperation
from typing import List, Optional

from errors import NotFound, ValidationError
from logger import get_logger
from models.category import Category
from models.common import utc_now
from store import paths

logger = get_logger()


def _validate_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Category name is required")
    return name.strip()


def _validate_limit(monthly_limit) -> Decimal:
    if monthly_limit is None or isinstance(monthly_limit, bool):
        raise ValidationError("monthly_limit is required")
    try:
        limit = Decimal(str(monthly_limit))
    except InvalidOperation:
        raise ValidationError(f"Invalid monthly_limit: {monthly_limit!r}")
    if not limit.is_finite() or limit < 0:
        raise ValidationError(f"monthly_limit must be a non-negative number: {monthly_limit!r}")
    return limit


class CategoryService:
    """Service for managing categories.

    All categories live in a single document, categories/categories.json,
    as {"categories": [...]}. Categories are archived, never deleted, so
    historical transactions keep a resolvable category.
    """

    def __init__(self, store):
        """Initialize the category service.

        Args:
            store: DocumentStore holding the categories document.
        """
        self.store = store

    def _load(self) -> List[Category]:
        document = self.store.read(paths.CATEGORIES_FILE)
        if not document:
            return []
        return [Category.from_dict(c) for c in document.get("categories", [])]

    def _save(self, categories: List[Category]) -> None:
        self.store.write(
            paths.CATEGORIES_FILE, {"categories": [c.to_dict() for c in categories]}
        )

    def find_all(self, user_id: str) -> List[Category]:
        """Get all categories of a user, archived ones included.

        Returns:
            List of Category objects in creation order.
        """
        return [c for c in self._load() if c.user_id == user_id]

    def find_active(self, user_id: str) -> List[Category]:
        """Get the user's categories that are not archived."""
        return [c for c in self.find_all(user_id) if not c.is_archived]

    def find(self, category_id: str) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        for category in self._load():
            if category.category_id == category_id:
                return category
        return None

    def get(self, category_id: str) -> Category:
        """Get a single category by ID.

        Raises:
            NotFound: If the category does not exist.
        """
        category = self.find(category_id)
        if category is None:
            raise NotFound(f"Category {category_id} not found")
        return category

    def find_default(self, user_id: str) -> Optional[Category]:
        """Get the user's catch-all category."""
        for category in self.find_all(user_id):
            if category.is_default:
                return category
        return None

    def ensure_default(self, user_id: str) -> List[Category]:
        """Make sure the user has a default category, creating it if missing.

        Safe to call repeatedly.

        Returns:
            All of the user's categories.
        """
        categories = self._load()
        if any(c.user_id == user_id and c.is_default for c in categories):
            return [c for c in categories if c.user_id == user_id]

        default = Category.create_default(user_id)
        categories.append(default)
        self._save(categories)
        logger.info(f"Created default category '{default.name}' ({default.category_id})")
        return [c for c in categories if c.user_id == user_id]

    def create(self, user_id: str, name, monthly_limit) -> Category:
        """Create a new category.

        Args:
            user_id: Owner of the category.
            name: Category name.
            monthly_limit: Spending limit per period, a non-negative number.

        Returns:
            The created Category object.

        Raises:
            ValidationError: If name or monthly_limit is missing or invalid.
        """
        category = Category(
            user_id=user_id,
            name=_validate_name(name),
            monthly_limit=_validate_limit(monthly_limit),
        )
        categories = self._load()
        categories.append(category)
        self._save(categories)

        logger.info(f"Created category '{category.name}' ({category.category_id})")
        return category

    def _find_owned(
        self, categories: List[Category], user_id: str, category_id: str
    ) -> Category:
        category = next((c for c in categories if c.category_id == category_id), None)
        if category is None or category.user_id != user_id:
            raise NotFound(f"Category {category_id} not found")
        return category

    def update(
        self, user_id: str, category_id: str, name=None, monthly_limit=None
    ) -> Category:
        """Update an existing category's name and/or limit.

        Args:
            user_id: Owner of the category.
            category_id: The category ID to update.
            name: New name, or None to keep the current one.
            monthly_limit: New limit, or None to keep the current one.

        Returns:
            The updated Category object.

        Raises:
            NotFound: If the category does not exist or belongs to another user.
            ValidationError: If a supplied value is invalid.
        """
        new_name = _validate_name(name) if name is not None else None
        new_limit = _validate_limit(monthly_limit) if monthly_limit is not None else None

        categories = self._load()
        category = self._find_owned(categories, user_id, category_id)

        if new_name is not None:
            category.name = new_name
        if new_limit is not None:
            category.monthly_limit = new_limit

        self._save(categories)
        return category

    def archive(self, user_id: str, category_id: str) -> Category:
        """Archive a category.

        Archiving an already archived category keeps its original archived_at.

        Raises:
            NotFound: If the category does not exist or belongs to another user.
            ValidationError: If the category is the default category.
        """
        categories = self._load()
        category = self._find_owned(categories, user_id, category_id)
        if category.is_default:
            raise ValidationError(f"Cannot archive the default '{category.name}' category")

        if category.archived_at is None:
            category.archived_at = utc_now()
            self._save(categories)
            logger.info(f"Archived category '{category.name}' ({category_id})")
        return category
