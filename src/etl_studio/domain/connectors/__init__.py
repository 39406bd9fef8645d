from .models import (
    Connector,
    ConnectorCreate,
    ConnectorStatus,
    ConnectorTestResult,
    ConnectorUpdate,
)

__all__ = [
    "Connector", "ConnectorCreate", "ConnectorUpdate", "ConnectorStatus", "ConnectorTestResult",
]
