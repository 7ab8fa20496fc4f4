"""Tests for patch merging and currency conversion."""

from decimal import Decimal

from fincommand.domain.models import Company, CompanyPatch
from fincommand.domain.services.currency import (
    convert_foreign_to_local,
    convert_local_to_foreign,
)
from fincommand.domain.services.patches import (
    CLEARED,
    apply_patch,
    patch_changes,
    revert_patch,
)


def test_patch_changes_skips_unset_fields():
    patch = CompanyPatch(name="Nueva", theme="red")

    assert patch_changes(patch) == {"name": "Nueva", "theme": "red"}


def test_apply_and_revert_patch():
    company = Company(id="c1", name="Vieja", theme="green")
    patch = CompanyPatch(name="Nueva")

    updated = apply_patch(company, patch)
    restored = apply_patch(updated, revert_patch(company, patch))

    assert updated.name == "Nueva"
    assert updated.theme == "green"
    assert restored == company
    assert apply_patch(company, CompanyPatch()) is company


def test_currency_conversion():
    assert convert_local_to_foreign("5850", "58.50") == Decimal("100.00")
    assert convert_local_to_foreign("100", "0") == 0
    assert convert_local_to_foreign("100", "3") == Decimal("33.33")
    assert convert_foreign_to_local("10", "58.5") == Decimal("585.0")


def test_cleared_fields_are_written_as_none_and_revert():
    company = Company(id="c1", name="Norte", logo="https://logo.png")
    patch = CompanyPatch(logo=CLEARED)

    updated = apply_patch(company, patch)
    undo = revert_patch(company, patch)

    assert patch_changes(patch) == {"logo": None}
    assert updated.logo is None
    assert apply_patch(updated, undo) == company
    assert patch_changes(revert_patch(updated, patch)) == {"logo": None}
