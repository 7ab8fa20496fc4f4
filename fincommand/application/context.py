"""Application context built once at startup."""

from dataclasses import dataclass

from fincommand.application.ports.auth import AuthGatewayPort
from fincommand.application.ports.database import DatabaseEnginePort
from fincommand.application.ports.preferences import PreferencesStorePort
from fincommand.application.ports.workbook_codec import WorkbookCodecPort


@dataclass
class AppContext:
    """Collaborators shared by every page and service.

    Attributes:
        settings: Runtime settings.
        db_port: Record store engine owner.
        auth: Authentication gateway.
        preferences: Device-local preferences store.
        codec: Workbook reader and writer.
        logger: Application logger.
    """

    settings: object
    db_port: DatabaseEnginePort
    auth: AuthGatewayPort
    preferences: PreferencesStorePort
    codec: WorkbookCodecPort
    logger: object

    def close(self) -> None:
        """Release the record store engine."""
        self.logger.info("Closing application context")
        self.db_port.dispose()


__all__ = ["AppContext"]
