"""SQLAlchemy-backed repository for companies."""

from sqlalchemy import text

from fincommand.application.ports.companies_repository import (
    CompaniesRepositoryPort,
)
from fincommand.application.ports.database import DatabaseEnginePort
from fincommand.domain.models import Company, CompanyPatch
from fincommand.domain.services.patches import patch_changes
from fincommand.infrastructure.record_store import (
    column_values,
    store_operation,
    update_statement,
)

COMPANY_COLUMNS = {
    "id": "id",
    "name": "name",
    "logo": "logo",
    "theme": "theme",
    "primary_color": "primary_color",
    "secondary_color": "secondary_color",
}

SELECT_COMPANIES_SQL = text(
    """
    SELECT id, name, logo, theme, primary_color, secondary_color
    FROM companies
    WHERE user_id = :user_id
    ORDER BY position, name
    """
)

INSERT_COMPANY_SQL = text(
    """
    INSERT INTO companies (
        id, user_id, name, logo, theme, primary_color, secondary_color,
        position
    )
    VALUES (
        :id, :user_id, :name, :logo, :theme, :primary_color,
        :secondary_color,
        (SELECT COUNT(*) FROM companies WHERE user_id = :user_id)
    )
    """
)


class SqlAlchemyCompaniesRepository(CompaniesRepositoryPort):
    """Repository backed by SQLAlchemy for the ``companies`` table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def list_companies(self, owner_id: str) -> list[Company]:
        engine = self._db_port.get_engine()
        with store_operation("list_companies"):
            with engine.connect() as conn:
                rows = conn.execute(
                    SELECT_COMPANIES_SQL, {"user_id": owner_id}
                ).all()
        defaults = Company(id=None, name="")
        return [
            Company(
                id=row.id,
                name=row.name,
                logo=row.logo,
                theme=row.theme or defaults.theme,
                primary_color=row.primary_color or defaults.primary_color,
                secondary_color=row.secondary_color or defaults.secondary_color,
            )
            for row in rows
        ]

    def insert_company(self, owner_id: str, company: Company) -> Company:
        params = {
            **column_values(vars(company), COMPANY_COLUMNS),
            "user_id": owner_id,
        }
        engine = self._db_port.get_engine()
        with store_operation("insert_company"):
            with engine.begin() as conn:
                conn.execute(INSERT_COMPANY_SQL, params)
        return company

    def update_company(self, company_id: str, patch: CompanyPatch) -> None:
        params = column_values(patch_changes(patch), COMPANY_COLUMNS)
        if not params:
            return
        params["id"] = company_id
        engine = self._db_port.get_engine()
        with store_operation("update_company"):
            with engine.begin() as conn:
                conn.execute(update_statement("companies", params), params)


__all__ = ["SqlAlchemyCompaniesRepository"]
