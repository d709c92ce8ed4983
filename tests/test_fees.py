"""Unit tests for the registration fee table."""

import pytest

from conference_portal.core.fees import (
    all_categories,
    default_category,
    find_category,
    registration_categories,
)


class TestRegistrationCategories:
    """Test category lookup by country and type."""

    def test_indian_authors(self):
        """Test Indian authors choose between student, faculty and scholar."""
        ids = [c.id for c in registration_categories("India", "author")]
        assert ids == ["indian-student", "indian-faculty", "indian-scholar"]

    def test_indonesian_listener(self):
        """Test Indonesian listeners pay in IDR."""
        (category,) = registration_categories("Indonesia", "listener")
        assert category.currency == "IDR"
        assert category.price_for(is_member=True) == 1200000

    def test_other_countries_are_international(self):
        """Test every other country uses the international USD fees."""
        (category,) = registration_categories("Brazil", "author")
        assert category.id == "foreign-author"
        assert category.price_for(is_member=False) == 350

    def test_no_country(self):
        """Test nothing is offered before a country is chosen."""
        assert registration_categories("", "author") == []

    def test_unknown_type(self):
        """Test unknown registration types are rejected."""
        with pytest.raises(ValueError, match="Unknown registration type"):
            registration_categories("India", "sponsor")


class TestDefaultCategory:
    """Test the preselected category."""

    def test_user_type_picks_indian_category(self):
        """Test an Indian faculty member gets the faculty fee preselected."""
        assert default_category("India", "author", "faculty").id == "indian-faculty"

    def test_first_category_otherwise(self):
        """Test the first category is used without a matching user type."""
        assert default_category("India", "author").id == "indian-student"
        assert default_category("Japan", "listener").id == "foreign-listener"

    def test_no_country(self):
        """Test None without a country."""
        assert default_category(None, "author") is None


class TestFindCategory:
    """Test lookup by id."""

    def test_find(self):
        """Test every category can be found by its id."""
        for category in all_categories():
            assert find_category(category.id) == category
        assert find_category("vip") is None
