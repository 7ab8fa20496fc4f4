"""Settings and preference helpers."""

from collections.abc import Sequence

from fincommand.domain.models import Company

DEFAULT_COMPANY = Company(
    id=None,
    name="Empresa Principal",
    theme="green",
    primary_color="#10b981",
    secondary_color="#064e3b",
)


def resolve_selected_company(
    companies: Sequence[Company],
    stored_id: str | None,
) -> Company | None:
    """Return the stored company if it still exists, else the first one."""
    if not companies:
        return None
    for company in companies:
        if stored_id is not None and company.id == stored_id:
            return company
    return companies[0]


__all__ = ["DEFAULT_COMPANY", "resolve_selected_company"]
