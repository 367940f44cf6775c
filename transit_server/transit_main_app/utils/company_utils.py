"""Company scoping helpers"""
from .constants import UserRole, BusinessRules


def get_company_for_user(user):
    """
    Company id a user's queries are scoped to

    Returns:
        BusinessRules.ALL_COMPANIES for super admins, otherwise the
        profile's company key (None when the account has no company)
    """
    profile = getattr(user, 'profile', None)
    if profile is None:
        return None
    if profile.role == UserRole.SUPER_ADMIN:
        return BusinessRules.ALL_COMPANIES
    return profile.company_key


def scope_to_company(queryset, user):
    company = get_company_for_user(user)
    if company == BusinessRules.ALL_COMPANIES:
        return queryset
    if company is None:
        return queryset.none()
    return queryset.filter(company_id=company)
