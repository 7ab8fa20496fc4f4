"""Port for company storage."""

from typing import Protocol

from fincommand.domain.models import Company, CompanyPatch


class CompaniesRepositoryPort(Protocol):
    """Port exposing read and write access to companies."""

    def list_companies(self, owner_id: str) -> list[Company]:
        """Return the owner's companies in creation order."""

    def insert_company(self, owner_id: str, company: Company) -> Company:
        """Store a company and return it with its assigned id."""

    def update_company(self, company_id: str, patch: CompanyPatch) -> None:
        """Write the set fields of ``patch``."""


__all__ = ["CompaniesRepositoryPort"]
