"""Registration fee table by country and registration type."""

from typing import Optional

from conference_portal.core.models import FeeCategory

INDIA = "India"
INDONESIA = "Indonesia"

_INDIAN_AUTHOR = [
    FeeCategory(
        id="indian-student",
        label="Indian Student",
        member_price=4500,
        non_member_price=5850,
        currency="INR",
        description="For undergraduate and postgraduate students",
    ),
    FeeCategory(
        id="indian-faculty",
        label="Indian Faculty",
        member_price=6750,
        non_member_price=7500,
        currency="INR",
        description="For faculty members and professors",
    ),
    FeeCategory(
        id="indian-scholar",
        label="Indian Research Scholar",
        member_price=6750,
        non_member_price=7500,
        currency="INR",
        description="For research scholars and PhD candidates",
    ),
]

_FEE_TABLE = {
    (INDIA, "author"): _INDIAN_AUTHOR,
    (INDIA, "listener"): [
        FeeCategory(
            id="indian-listener",
            label="Indian Listener/Attendee",
            member_price=2500,
            non_member_price=3500,
            currency="INR",
            description="For conference attendees without paper presentation",
        )
    ],
    (INDONESIA, "author"): [
        FeeCategory(
            id="indonesian-author",
            label="Indonesian Author",
            member_price=1700000,
            non_member_price=2600000,
            currency="IDR",
            description="For Indonesian authors presenting papers",
        )
    ],
    (INDONESIA, "listener"): [
        FeeCategory(
            id="indonesian-listener",
            label="Indonesian Listener/Attendee",
            member_price=1200000,
            non_member_price=1500000,
            currency="IDR",
            description="For Indonesian conference attendees",
        )
    ],
    (None, "author"): [
        FeeCategory(
            id="foreign-author",
            label="International Author",
            member_price=300,
            non_member_price=350,
            currency="USD",
            description="For international authors presenting papers",
        )
    ],
    (None, "listener"): [
        FeeCategory(
            id="foreign-listener",
            label="International Listener/Attendee",
            member_price=100,
            non_member_price=150,
            currency="USD",
            description="For international conference attendees",
        )
    ],
}

# Indian authors are matched to a category by the user type on their profile
_USER_TYPE_CATEGORY = {
    "student": "indian-student",
    "faculty": "indian-faculty",
    "scholar": "indian-scholar",
}


def registration_categories(country: Optional[str], registration_type: str) -> list[FeeCategory]:
    """Fee categories open to a user from ``country`` registering as ``registration_type``."""
    if not country:
        return []
    if registration_type not in ("author", "listener"):
        raise ValueError(f"Unknown registration type '{registration_type}'")
    key_country = country if country in (INDIA, INDONESIA) else None
    return list(_FEE_TABLE[(key_country, registration_type)])


def default_category(
    country: Optional[str], registration_type: str, user_type: Optional[str] = None
) -> Optional[FeeCategory]:
    """Pick the category to preselect on the registration form."""
    categories = registration_categories(country, registration_type)
    if not categories:
        return None
    if registration_type == "author" and country == INDIA and user_type in _USER_TYPE_CATEGORY:
        wanted = _USER_TYPE_CATEGORY[user_type]
        for category in categories:
            if category.id == wanted:
                return category
    return categories[0]


def find_category(category_id: str) -> Optional[FeeCategory]:
    for categories in _FEE_TABLE.values():
        for category in categories:
            if category.id == category_id:
                return category
    return None


def all_categories() -> list[FeeCategory]:
    return [category for categories in _FEE_TABLE.values() for category in categories]
