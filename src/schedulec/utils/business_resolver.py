"""Utility for resolving business names to IDs."""

from schedulec.domain.business import BusinessService


def resolve_business(business_service: BusinessService, business: str, user_id: str | None = None) -> str:
    """Resolve a business name or ID to a business ID.

    An exact ID match wins; otherwise the value is matched case-insensitively
    against active business names.

    Args:
        business_service: BusinessService instance
        business: Business name or ID
        user_id: Optional owner to restrict the name lookup to

    Returns:
        Business ID

    Raises:
        ValueError: If business is not found
    """
    business = business.strip()
    if business_service.get_business(business) is not None:
        return business

    match = business_service.find_business_by_name(business, user_id)
    if match is not None:
        return match.id

    raise ValueError(f"Business '{business}' not found")
