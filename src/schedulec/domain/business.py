"""Business domain service."""

from typing import Optional
from schedulec.database.base import Database
from schedulec.domain.categories import BUSINESS_TYPES
from schedulec.domain.entities import Business as BusinessEntity
from schedulec.domain.errors import (
    ConflictError,
    NotFoundError,
    business_not_found,
    duplicate_business_name,
)
from schedulec.domain.validation import require_text, validate_business_type


class BusinessService:
    """Service for managing businesses."""

    def __init__(self, db: Database):
        """Initialize business service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_business(self, name: str, user_id: str, business_type: Optional[str] = None) -> str:
        """Create a new business.

        Args:
            name: Business name
            user_id: Owning user ID
            business_type: One of BUSINESS_TYPES; defaults to the first type

        Returns:
            Business ID

        Raises:
            ValidationError: If the name is empty or the type is unknown
            ConflictError: If an active business with this name already exists
        """
        name = require_text(name, "Business name")
        business_type = validate_business_type(business_type or BUSINESS_TYPES[0])

        # Check if business with same name exists
        if self.does_business_exist(name, user_id):
            raise ConflictError(duplicate_business_name(name))

        return self.db.create_business(name=name, business_type=business_type, created_by=user_id)

    def get_business(self, business_id: str) -> Optional[BusinessEntity]:
        """Get business by ID.

        Args:
            business_id: Business ID

        Returns:
            Business entity or None if not found
        """
        return self.db.get_business(business_id)

    def require_business(self, business_id: str) -> BusinessEntity:
        """Get business by ID or raise NotFoundError."""
        business = self.db.get_business(business_id)
        if business is None:
            raise NotFoundError(business_not_found(business_id))
        return business

    def list_businesses(
        self, user_id: Optional[str] = None, include_inactive: bool = False
    ) -> list[BusinessEntity]:
        """List businesses ordered by name.

        Args:
            user_id: Optional owner to filter by
            include_inactive: If True, include deactivated businesses

        Returns:
            List of business entities
        """
        return self.db.list_businesses(created_by=user_id, include_inactive=include_inactive)

    def find_business_by_name(self, name: str, user_id: Optional[str] = None) -> Optional[BusinessEntity]:
        """Find an active business by case-insensitive name."""
        wanted = name.strip().lower()
        for business in self.list_businesses(user_id=user_id):
            if business.name.lower() == wanted:
                return business
        return None

    def does_business_exist(self, name: str, user_id: Optional[str] = None) -> bool:
        """Check if an active business with this name exists (case-insensitive)."""
        return self.find_business_by_name(name, user_id) is not None

    def update_business(
        self, business_id: str, name: Optional[str] = None, business_type: Optional[str] = None
    ) -> BusinessEntity:
        """Rename a business and/or change its type.

        Entries already attributed to the business keep the name they were
        saved with.

        Raises:
            NotFoundError: If business not found
            ConflictError: If the new name is taken by another active business
        """
        self.require_business(business_id)
        return self.db.update_business(business_id, name=name, business_type=business_type)

    def deactivate_business(self, business_id: str) -> BusinessEntity:
        """Hide a business from selection. Its entries are untouched."""
        self.require_business(business_id)
        return self.db.set_business_active(business_id, False)

    def reactivate_business(self, business_id: str) -> BusinessEntity:
        """Make a deactivated business selectable again."""
        self.require_business(business_id)
        return self.db.set_business_active(business_id, True)

    def default_business(self, user_id: Optional[str] = None) -> Optional[BusinessEntity]:
        """Return the sole active business, if exactly one exists."""
        businesses = self.list_businesses(user_id=user_id)
        if len(businesses) == 1:
            return businesses[0]
        return None
